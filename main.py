import argparse
import logging
from multiprocessing import Manager, Process

import pygame

from constants import DT, FPS, HEIGHT, WIDTH
from press.config import PressConfig, load_config
from press.controller import INPUT_NAMES, PressController
from press.render import PressRenderer
import gui_controller as gui_ctrl

logger = logging.getLogger(__name__)

# interaction-end events that must always stop a pump session
_POINTER_LEAVE_EVENTS = {
    getattr(pygame, "WINDOWLEAVE", None),
    getattr(pygame, "WINDOWFOCUSLOST", None),
} - {None}


def _finger_pos(event):
    # touch coordinates are normalized to the window
    return int(event.x * WIDTH), int(event.y * HEIGHT)


class App:
    """pygame window plus the optional DearPyGui control panel process."""

    def __init__(self, config: PressConfig, use_panel=True):
        self.config = config
        self.controller = PressController(config, on_inputs_changed=self._on_inputs_changed)
        self._inputs_dirty = True
        self.use_panel = use_panel
        self.running = False
        self._pointer_pumping = False
        self._panel_pumping = False
        self._shared = None
        self._mgr = None
        self._gui_proc = None

    # --- panel process ---

    def _start_panel(self):
        self._mgr = Manager()
        self._shared = self._mgr.dict()
        controls = self.config.controls
        self._shared['ranges'] = {
            name: (getattr(controls, name).min, getattr(controls, name).max, getattr(controls, name).step)
            for name in INPUT_NAMES
        }
        self._shared['realistic_mode'] = self.controller.state.realistic_mode
        self._shared['pump_held'] = False
        self._shared['release'] = False
        self._shared['reset'] = False
        self._shared['__exit__'] = False
        self._publish()
        self._gui_proc = Process(target=gui_ctrl.run_gui, args=(self._shared,), daemon=True)
        self._gui_proc.start()
        logger.info("Control panel started (pid %s)", self._gui_proc.pid)

    def _stop_panel(self):
        if self._gui_proc is None:
            return
        try:
            self._shared['__exit__'] = True
        except (EOFError, BrokenPipeError, ConnectionError):
            logger.debug("Panel channel already closed")
        self._gui_proc.join(timeout=1.0)
        if self._gui_proc.is_alive():
            self._gui_proc.terminate()
        self._mgr.shutdown()
        self._gui_proc = None
        self._shared = None
        logger.info("Control panel stopped")

    def _apply_panel_requests(self):
        shared = self._shared
        if shared.get('__exit__', False):
            self.stop()
            return
        for name in INPUT_NAMES:
            value = shared.get(f"set_{name}")
            if value is not None:
                shared[f"set_{name}"] = None
                self.controller.set_input(name, value)
        if bool(shared.get('realistic_mode', False)) != self.controller.state.realistic_mode:
            self.controller.set_realistic_mode(shared['realistic_mode'])
        if shared.get('release', False):
            shared['release'] = False
            self.controller.release()
        if shared.get('reset', False):
            shared['reset'] = False
            self.controller.reset()

        held = bool(shared.get('pump_held', False))
        if held and not self._panel_pumping:
            self.controller.start_pump()
        elif not held and self._panel_pumping:
            self.controller.stop_pump()
        self._panel_pumping = held

    def _on_inputs_changed(self, state):
        # panel values only change with the inputs, so publish on demand
        self._inputs_dirty = True

    def _publish(self):
        state = self.controller.state
        readouts = self.controller.readouts()
        for name in INPUT_NAMES:
            self._shared[name] = getattr(state, name)
        self._shared['warning'] = readouts.warning
        self._shared['status'] = f"P = {readouts.pressure}, F2 = {readouts.output_force}"
        self._inputs_dirty = False

    def _sync_panel(self):
        if self._shared is None:
            return
        try:
            self._apply_panel_requests()
            if self._shared is not None and self._inputs_dirty:
                self._publish()
        except (EOFError, BrokenPipeError, ConnectionError):
            logger.debug("Lost connection to control panel; continuing without it")
            self._shared = None

    # --- pygame events ---

    def _press_button(self, name):
        if name == "pump":
            self._pointer_pumping = True
            self.controller.start_pump()
        elif name == "release":
            self.controller.release()
        elif name == "reset":
            self.controller.reset()

    def _end_pointer_pump(self):
        if self._pointer_pumping:
            self._pointer_pumping = False
            self.controller.stop_pump()

    def handle_event(self, event, renderer):
        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press_button(renderer.button_at(event.pos))
        elif event.type == pygame.MOUSEBUTTONUP:
            self._end_pointer_pump()
        elif event.type == pygame.MOUSEMOTION:
            # pointer left the pump button while held
            if self._pointer_pumping and renderer.button_at(event.pos) != "pump":
                self._end_pointer_pump()
        elif event.type == pygame.FINGERDOWN:
            self._press_button(renderer.button_at(_finger_pos(event)))
        elif event.type == pygame.FINGERUP:
            self._end_pointer_pump()
        elif event.type in _POINTER_LEAVE_EVENTS:
            self._end_pointer_pump()
            self.controller.stop_pump()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.controller.start_pump()
            elif event.key == pygame.K_l:
                self.controller.release()
            elif event.key == pygame.K_r:
                self.controller.reset()
            elif event.key == pygame.K_m:
                self.controller.set_realistic_mode(not self.controller.state.realistic_mode)
                if self._shared is not None:
                    self._shared['realistic_mode'] = self.controller.state.realistic_mode
            elif event.key == pygame.K_ESCAPE:
                self.stop()
        elif event.type == pygame.KEYUP:
            if event.key == pygame.K_SPACE:
                self.controller.stop_pump()

    # --- lifecycle ---

    def stop(self):
        """End the frame loop; cleanup happens when run() unwinds."""
        self.running = False
        self.controller.stop_pump()

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Hydraulic Press")
        clock = pygame.time.Clock()
        renderer = PressRenderer(WIDTH, HEIGHT)

        if self.use_panel:
            self._start_panel()

        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event, renderer)

                self._sync_panel()

                # --- Update ---
                # cap dt so a stalled window does not jump the animation
                dt = min(clock.get_time() / 1000.0 or DT, 0.1)
                frame = self.controller.update(dt)

                # --- Draw ---
                renderer.draw(screen, self.controller.state, frame, self.controller.readouts())
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            self._stop_panel()
            pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive hydraulic press (Pascal's Law)")
    parser.add_argument("--config", help="YAML file overriding the default tuning")
    parser.add_argument("--no-panel", action="store_true", help="do not open the DearPyGui control panel")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = load_config(args.config) if args.config else PressConfig()
    App(config, use_panel=not args.no_panel).run()


if __name__ == "__main__":
    main()
