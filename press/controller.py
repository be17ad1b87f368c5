"""
Press controller - turns user interactions into state changes.

Every input change goes through ``_apply_inputs`` so pressure and output force
are recomputed together. The frame loop calls ``update(dt)`` once per frame;
pump and release are stepped there rather than on host timers.
"""

import logging
from typing import Callable, Optional

from .actions import PumpAction, ReleaseAction
from .animation import FrameLayout, advance, layout
from .config import PressConfig
from .readouts import Readouts, format_readouts
from .state import PressState, default_state

logger = logging.getLogger(__name__)

INPUT_NAMES = ("input_force", "input_area", "output_area")


class PressController:
    def __init__(self, config: Optional[PressConfig] = None,
                 on_inputs_changed: Optional[Callable[[PressState], None]] = None):
        self.config = config if config is not None else PressConfig()
        self._on_inputs_changed = on_inputs_changed
        self.state = default_state(self.config)
        timing = self.config.timing
        self.pump = PumpAction(timing.pump_step, timing.pump_period)
        self.release_action = ReleaseAction(timing.release_step, timing.release_period)

    # --- inputs ---

    def set_input(self, name, value):
        self.set_inputs(**{name: value})

    def set_inputs(self, **values):
        for name in values:
            if name not in INPUT_NAMES:
                raise KeyError(f"Unknown input: {name}")
        controls = self.config.controls
        clamped = {name: getattr(controls, name).clamp(v) for name, v in values.items()}
        self._apply_inputs(self.state, **clamped)

    def set_realistic_mode(self, enabled):
        self.state.realistic_mode = bool(enabled)

    def _apply_inputs(self, state, **inputs):
        self.state = state.with_inputs(self.config, **inputs)
        if self._on_inputs_changed is not None:
            self._on_inputs_changed(self.state)

    @property
    def warning(self):
        return self.state.warning

    # --- pump / release / reset ---

    def start_pump(self):
        if self.pump.start():
            self.state.pumping = True
            logger.info("Pump started at %.0f N", self.state.input_force)

    def stop_pump(self):
        was_active = self.pump.active
        self.pump.stop()
        self.state.pumping = False
        if was_active:
            logger.info("Pump stopped at %.0f N", self.state.input_force)

    def release(self):
        if self.state.input_force <= 0:
            return
        if self.release_action.start():
            logger.info("Releasing from %.0f N", self.state.input_force)

    @property
    def releasing(self):
        return self.release_action.active

    def reset(self):
        self.pump.stop()
        self.release_action.stop()
        fresh = default_state(self.config, realistic_mode=self.state.realistic_mode)
        self._apply_inputs(fresh)
        logger.info("Press reset")

    # --- frame ---

    def update(self, dt) -> FrameLayout:
        force = self.state.input_force
        state = self.pump.update(dt, self.state, self.config)
        state = self.release_action.update(dt, state, self.config)
        if state.input_force != force:
            self._apply_inputs(state)
        self.state = advance(self.state, self.config, dt)
        return layout(self.state, self.config)

    def layout(self) -> FrameLayout:
        return layout(self.state, self.config)

    def readouts(self) -> Readouts:
        return format_readouts(self.state)
