# --- Constants ---
WIDTH, HEIGHT = 900, 600
FPS = 60
DT = 1.0 / FPS

# --- Colors ---
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (220, 38, 38)
GREY = (148, 163, 184)
DARK_GREY = (71, 85, 105)
STEEL = (100, 116, 139)
AMBER = (245, 158, 11)
GREEN = (22, 163, 74)
BACKGROUND = (241, 245, 249)

OBJECT_COLOR = (234, 179, 8)  # Crate sitting on the output piston
CRACK_COLOR = (30, 30, 30)

# --- Press geometry (screen space) ---
LEFT_CYLINDER_X = 180
RIGHT_CYLINDER_X = 560
CYLINDER_TOP = 140
BUTTON_HEIGHT = 44
