"""
State of the press.

One ``PressState`` is owned by the controller. Derived fields (pressure and
output force) are filled in by ``with_inputs`` so they always move together.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto

from .config import PressConfig
from .model import compute, provides_advantage


class CrushState(Enum):
    """Crush latch: INTACT -> CRUSHED on contact with enough force, back only on reset."""
    INTACT = auto()
    CRUSHED = auto()


@dataclass
class PressState:
    input_force: float
    input_area: float
    output_area: float
    pressure: float = 0.0
    output_force: float = 0.0
    visual_position: float = 0.0
    crush: CrushState = CrushState.INTACT
    pumping: bool = False
    realistic_mode: bool = False

    @property
    def is_crushed(self) -> bool:
        return self.crush is CrushState.CRUSHED

    @property
    def warning(self) -> bool:
        return not provides_advantage(self.input_area, self.output_area)

    def with_inputs(self, config: PressConfig, **inputs) -> "PressState":
        """Return a copy with new inputs and freshly computed pressure and output force."""
        state = replace(self, **inputs)
        reading = compute(state.input_force, state.input_area, state.output_area,
                          conversion=config.pressure_conversion)
        state.pressure = reading.pressure
        state.output_force = reading.output_force
        return state


def default_state(config: PressConfig, realistic_mode: bool = False) -> PressState:
    controls = config.controls
    state = PressState(
        input_force=controls.default_input_force,
        input_area=controls.default_input_area,
        output_area=controls.default_output_area,
        realistic_mode=realistic_mode,
    )
    return state.with_inputs(config)
