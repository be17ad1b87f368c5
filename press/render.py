import math

import numpy as np
import pygame

import constants
from .animation import FrameLayout
from .readouts import Readouts
from .state import PressState

CYLINDER_DEPTH = 250
WALL = 4
PISTON_HEAD = 12
OBJECT_HEIGHT = 60
OBJECT_WIDTH_RATIO = 0.6
CEILING_Y = -60
CEILING_THICKNESS = 20
PIPE_TOP = 225
BUTTONS = ("pump", "release", "reset")


def cylinder_width(area):
    """Screen width grows with the piston diameter, i.e. sqrt(area)."""
    return 20.0 + 14.0 * math.sqrt(area)


def crack_lines(rect, count=3, segments=6, seed=7):
    """Zig-zag polylines across ``rect``; a fixed seed keeps them still between frames."""
    rng = np.random.default_rng(seed)
    lines = []
    for i in range(count):
        x0 = rect.left + rect.width * (i + 1) / (count + 1)
        ys = np.linspace(rect.top, rect.bottom, segments + 1)
        xs = x0 + rng.uniform(-rect.width * 0.12, rect.width * 0.12, size=ys.shape)
        lines.append([(int(x), int(y)) for x, y in zip(xs, ys)])
    return lines


class PressRenderer:
    def __init__(self, width=constants.WIDTH, height=constants.HEIGHT):
        self.width = width
        self.height = height
        self.font = pygame.font.Font(None, 26)
        self.big_font = pygame.font.Font(None, 56)
        self.small_font = pygame.font.Font(None, 22)
        self.button_rects = self._layout_buttons()

    def _layout_buttons(self):
        w, h, gap = 140, constants.BUTTON_HEIGHT, 16
        total = len(BUTTONS) * w + (len(BUTTONS) - 1) * gap
        x = (self.width - total) // 2
        y = self.height - h - 12
        rects = {}
        for name in BUTTONS:
            rects[name] = pygame.Rect(x, y, w, h)
            x += w + gap
        return rects

    def button_at(self, pos):
        for name, rect in self.button_rects.items():
            if rect.collidepoint(pos):
                return name
        return None

    def draw(self, screen, state: PressState, frame: FrameLayout, readouts: Readouts):
        screen.fill(constants.BACKGROUND)
        left_w = cylinder_width(state.input_area)
        right_w = cylinder_width(state.output_area)
        self._draw_pipe(screen, left_w, right_w, frame)
        self._draw_left(screen, left_w, frame)
        self._draw_right(screen, right_w, frame, readouts.crushed_message)
        self._draw_gauge(screen, state, readouts)
        self._draw_readouts(screen, readouts)
        self._draw_buttons(screen, state)

    # --- press ---

    def _to_screen(self, cx, local_y):
        return cx, constants.CYLINDER_TOP + local_y

    def _draw_cylinder_body(self, screen, cx, width):
        _, top = self._to_screen(cx, 0)
        body = pygame.Rect(int(cx - width / 2) - WALL, top, int(width) + 2 * WALL, CYLINDER_DEPTH + WALL)
        pygame.draw.rect(screen, constants.DARK_GREY, body, WALL)
        return body

    def _draw_fluid(self, screen, cx, width, fluid, color):
        fluid_top, fluid_height = fluid
        _, top = self._to_screen(cx, fluid_top)
        pygame.draw.rect(screen, color, pygame.Rect(int(cx - width / 2), int(top), int(width), int(fluid_height)))

    def _draw_piston(self, screen, cx, width, piston_y, rod_up):
        _, y = self._to_screen(cx, piston_y)
        head = pygame.Rect(int(cx - width / 2), int(y - PISTON_HEAD), int(width), PISTON_HEAD)
        pygame.draw.rect(screen, constants.STEEL, head)
        if rod_up:
            rod = pygame.Rect(int(cx - 6), int(constants.CYLINDER_TOP - 40), 12, int(head.top - constants.CYLINDER_TOP + 40))
            pygame.draw.rect(screen, constants.GREY, rod)
            pygame.draw.rect(screen, constants.STEEL, pygame.Rect(int(cx - 30), rod.top - 10, 60, 10))
        return head

    def _draw_pipe(self, screen, left_w, right_w, frame):
        x0 = int(constants.LEFT_CYLINDER_X + left_w / 2)
        x1 = int(constants.RIGHT_CYLINDER_X - right_w / 2)
        _, top = self._to_screen(0, PIPE_TOP)
        pipe = pygame.Rect(x0, int(top), x1 - x0, CYLINDER_DEPTH - PIPE_TOP)
        pygame.draw.rect(screen, frame.fluid_color, pipe)
        pygame.draw.rect(screen, constants.DARK_GREY, pipe.inflate(0, 2 * WALL), WALL)

    def _draw_left(self, screen, width, frame):
        cx = constants.LEFT_CYLINDER_X
        self._draw_fluid(screen, cx, width, frame.left_fluid, frame.fluid_color)
        self._draw_cylinder_body(screen, cx, width)
        self._draw_piston(screen, cx, width, frame.left_piston_y, rod_up=True)
        label = self.small_font.render("F1 (input)", True, constants.BLACK)
        screen.blit(label, (cx - label.get_width() // 2, constants.CYLINDER_TOP - 80))

    def _draw_right(self, screen, width, frame, crushed_message):
        cx = constants.RIGHT_CYLINDER_X
        self._draw_fluid(screen, cx, width, frame.right_fluid, frame.fluid_color)
        self._draw_cylinder_body(screen, cx, width)
        head = self._draw_piston(screen, cx, width, frame.right_piston_y, rod_up=False)

        _, ceiling_top = self._to_screen(cx, CEILING_Y - CEILING_THICKNESS)
        ceiling = pygame.Rect(int(cx - 130), int(ceiling_top), 260, CEILING_THICKNESS)
        pygame.draw.rect(screen, constants.DARK_GREY, ceiling)

        # object rests on the platform; flattening keeps its base on the piston
        obj_h = int(OBJECT_HEIGHT * frame.object_scale)
        obj_w = int(min(width, 160) * OBJECT_WIDTH_RATIO)
        obj = pygame.Rect(int(cx - obj_w / 2), head.top - obj_h, obj_w, obj_h)
        pygame.draw.rect(screen, constants.OBJECT_COLOR, obj)
        pygame.draw.rect(screen, constants.BLACK, obj, 2)

        if frame.cracks_visible:
            for line in crack_lines(obj):
                pygame.draw.lines(screen, constants.CRACK_COLOR, False, line, 2)
        if frame.message_visible:
            msg = self.big_font.render(crushed_message, True, constants.RED)
            screen.blit(msg, (cx - msg.get_width() // 2, ceiling.top - msg.get_height() - 8))

    # --- readouts ---

    def _draw_gauge(self, screen, state, readouts):
        center = (int((constants.LEFT_CYLINDER_X + constants.RIGHT_CYLINDER_X) / 2), constants.CYLINDER_TOP + 60)
        radius = 46
        pygame.draw.circle(screen, constants.WHITE, center, radius)
        pygame.draw.circle(screen, constants.DARK_GREY, center, radius, 3)
        # needle sweeps 270 degrees across the log-scaled pressure range
        t = min(1.0, math.log10(1.0 + state.pressure) / 4.0)
        angle = math.radians(225 - 270 * t)
        tip = (center[0] + int(math.cos(angle) * (radius - 8)), center[1] - int(math.sin(angle) * (radius - 8)))
        pygame.draw.line(screen, constants.RED, center, tip, 3)
        text = self.small_font.render(readouts.gauge, True, constants.BLACK)
        screen.blit(text, (center[0] - text.get_width() // 2, center[1] + radius + 6))

    def _draw_readouts(self, screen, readouts):
        x, y = 24, constants.CYLINDER_TOP + CYLINDER_DEPTH + 24
        rows = (
            f"F1 = {readouts.input_force}    A1 = {readouts.input_area}    A2 = {readouts.output_area}",
            f"P = F1 / A1 = {readouts.pressure}",
            f"F2 = {readouts.force_term} x {readouts.ratio} = {readouts.output_force}",
        )
        for row in rows:
            surf = self.font.render(row, True, constants.BLACK)
            screen.blit(surf, (x, y))
            y += surf.get_height() + 6
        if readouts.warning:
            warn = self.font.render("Warning: A1 >= A2, no mechanical advantage", True, constants.AMBER)
            screen.blit(warn, (x, y + 4))

    def _draw_buttons(self, screen, state):
        active = {"pump": state.pumping}
        for name, rect in self.button_rects.items():
            color = constants.GREEN if active.get(name) else constants.STEEL
            pygame.draw.rect(screen, color, rect, border_radius=8)
            label = self.font.render(name.upper(), True, constants.WHITE)
            screen.blit(label, label.get_rect(center=rect.center))
