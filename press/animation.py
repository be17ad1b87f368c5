"""
Per-frame animation step for the press.

``advance`` eases the stroke toward the position implied by the input force
and evaluates the crush latch. ``layout`` turns a state into the piston, fluid
and object geometry the renderer draws. Both are deterministic so the frame
loop can be replayed in tests without a display.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .config import PressConfig
from .state import CrushState, PressState

logger = logging.getLogger(__name__)

# local y of the piston tops and fluid columns inside each cylinder
LEFT_PISTON_REST = 100.0
LEFT_FLUID_HEIGHT = 150.0
RIGHT_PISTON_REST = 150.0
RIGHT_FLUID_HEIGHT = 100.0


@dataclass(frozen=True)
class FrameLayout:
    """Geometry of one frame, in cylinder-local pixels."""
    left_offset: float
    right_travel: float
    left_piston_y: float
    left_fluid: Tuple[float, float]   # (top, height)
    right_piston_y: float
    right_fluid: Tuple[float, float]
    contact: bool
    object_scale: float
    cracks_visible: bool
    message_visible: bool
    fluid_color: Tuple[int, int, int]


def target_position(state: PressState, config: PressConfig) -> float:
    return state.input_force / config.controls.max_input_force


def ease(current, target, speed, epsilon, dt=None, reference_dt=1.0 / 60.0):
    """
    Move ``current`` a fraction of the way to ``target``.

    ``speed`` is the fraction covered per reference frame; other ``dt`` values
    are rescaled so the motion does not depend on frame rate. Within
    ``epsilon`` the value snaps onto the target.
    """
    diff = target - current
    if abs(diff) <= epsilon:
        return target
    if dt is None:
        fraction = speed
    else:
        fraction = 1.0 - (1.0 - speed) ** (dt / reference_dt)
    return current + diff * fraction


def piston_travel(visual_position, input_area, output_area, anim):
    """
    Left piston offset and clamped right piston travel in pixels.

    The right stroke is the left one scaled by the area ratio and a visual
    exaggeration, stopped at the ceiling.
    """
    y_left = visual_position * anim.input_travel
    y_right = y_left * (input_area / output_area) * anim.visual_exaggeration
    return y_left, min(y_right, anim.max_travel)


def in_contact(travel, anim) -> bool:
    return travel > anim.max_travel - anim.contact_margin


def advance(state: PressState, config: PressConfig, dt: Optional[float] = None) -> PressState:
    """Run one animation tick and return the next state."""
    anim = config.animation
    speed = anim.realistic_speed if state.realistic_mode else anim.speed
    position = ease(state.visual_position, target_position(state, config), speed,
                    anim.snap_epsilon, dt=dt, reference_dt=anim.reference_dt)

    crush = state.crush
    if crush is CrushState.INTACT:
        _, travel = piston_travel(position, state.input_area, state.output_area, anim)
        if in_contact(travel, anim) and state.output_force > config.crush_threshold:
            crush = CrushState.CRUSHED
            logger.info("Object crushed at %.0f N (threshold %.0f N)",
                        state.output_force, config.crush_threshold)

    return replace(state, visual_position=position, crush=crush)


def fluid_color(pressure, config: PressConfig):
    """Blend from the base fluid colour toward the high-pressure one."""
    controls = config.controls
    reference = controls.max_input_force / controls.default_input_area * config.pressure_conversion
    t = float(np.clip(pressure / reference, 0.0, 1.0))
    base = np.asarray(config.fluid_base_color, dtype=np.float64)
    high = np.asarray(config.fluid_high_pressure_color, dtype=np.float64)
    return tuple(int(round(c)) for c in base + (high - base) * t)


def layout(state: PressState, config: PressConfig) -> FrameLayout:
    anim = config.animation
    y_left, travel = piston_travel(state.visual_position, state.input_area, state.output_area, anim)
    crushed = state.is_crushed
    return FrameLayout(
        left_offset=y_left,
        right_travel=travel,
        left_piston_y=LEFT_PISTON_REST + y_left,
        left_fluid=(LEFT_PISTON_REST + y_left, LEFT_FLUID_HEIGHT - y_left),
        right_piston_y=RIGHT_PISTON_REST - travel,
        right_fluid=(RIGHT_PISTON_REST - travel, RIGHT_FLUID_HEIGHT + travel),
        contact=in_contact(travel, anim),
        object_scale=anim.crushed_scale if crushed else 1.0,
        cracks_visible=crushed,
        message_visible=crushed,
        fluid_color=fluid_color(state.pressure, config),
    )
