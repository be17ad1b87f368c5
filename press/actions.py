import logging

from .config import PressConfig
from .state import PressState

logger = logging.getLogger(__name__)

# tolerance so accumulated float dt does not drop a tick at exact multiples
_TICK_EPS = 1e-9


class RepeatingAction:
    """
    Fires ``tick`` every ``period`` seconds of accumulated frame time.

    Driven by ``update(dt, ...)`` from the frame loop instead of a host timer,
    so a test can step it deterministically.
    """
    def __init__(self, period):
        self.period = float(period)
        self.elapsed = 0.0
        self.active = False

    def start(self):
        """Begin a session. Returns False when one is already running."""
        if self.active:
            return False
        self.active = True
        self.elapsed = 0.0
        return True

    def stop(self):
        self.active = False
        self.elapsed = 0.0

    def update(self, dt, state: PressState, config: PressConfig) -> PressState:
        if not self.active:
            return state
        self.elapsed += dt
        while self.active and self.elapsed + _TICK_EPS >= self.period:
            self.elapsed -= self.period
            state = self.tick(state, config)
        return state

    def tick(self, state: PressState, config: PressConfig) -> PressState:
        raise NotImplementedError("Subclasses should implement this method.")

    def __repr__(self):
        return f"<{self.__class__.__name__} active={self.active} period={self.period}>"


class PumpAction(RepeatingAction):
    """Press-and-hold pump: adds force in fixed steps up to the slider maximum."""
    def __init__(self, step, period):
        super().__init__(period)
        self.step = float(step)

    def tick(self, state, config):
        max_force = config.controls.max_input_force
        if state.input_force < max_force:
            return state.with_inputs(config, input_force=min(max_force, state.input_force + self.step))
        return state


class ReleaseAction(RepeatingAction):
    """Bleeds the input force down to zero, then stops itself."""
    def __init__(self, step, period):
        super().__init__(period)
        self.step = float(step)

    def tick(self, state, config):
        if state.input_force > 0:
            state = state.with_inputs(config, input_force=max(0.0, state.input_force - self.step))
        if state.input_force <= 0:
            self.stop()
            logger.info("Release finished")
        return state
