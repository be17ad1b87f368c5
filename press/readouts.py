from dataclasses import dataclass

from .model import mechanical_advantage
from .state import PressState

CRUSHED_MESSAGE = "CRUSHED!"


@dataclass(frozen=True)
class Readouts:
    input_force: str
    input_area: str
    output_area: str
    force_term: str
    ratio: str
    pressure: str
    output_force: str
    gauge: str
    warning: bool
    crushed_message: str


def _number(value):
    # slider labels show the raw value without a trailing ".0"
    return f"{value:g}"


def format_readouts(state: PressState) -> Readouts:
    ratio = mechanical_advantage(state.input_area, state.output_area)
    return Readouts(
        input_force=f"{_number(state.input_force)} N",
        input_area=f"{_number(state.input_area)} cm²",
        output_area=f"{_number(state.output_area)} cm²",
        force_term=f"{state.input_force:.0f} N",
        ratio=f"{ratio:.2f} x",
        pressure=f"{state.pressure:.1f} kPa",
        output_force=f"{state.output_force:.0f} N",
        gauge=f"{state.pressure:.0f} kPa",
        warning=state.warning,
        crushed_message=CRUSHED_MESSAGE if state.is_crushed else "",
    )
