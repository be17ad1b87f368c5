"""
Configuration loading and validation for the hydraulic press.

Every tunable lives in a dataclass with a ``validate()`` method. Defaults
reproduce the classroom demo; a YAML file can override any section.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ControlRange:
    """Bounds enforced by a slider."""
    min: float
    max: float
    step: float = 1.0

    def validate(self, name: str) -> tuple[bool, Optional[str]]:
        if self.min >= self.max:
            return False, f"{name}: min must be below max"
        if self.step <= 0:
            return False, f"{name}: step must be positive"
        return True, None

    def clamp(self, value: float) -> float:
        """Snap onto the slider grid anchored at ``min``, then bound."""
        snapped = self.min + round((float(value) - self.min) / self.step) * self.step
        return max(self.min, min(self.max, snapped))


@dataclass
class ControlsConfig:
    """Slider ranges and the values restored by reset."""
    input_force: ControlRange = field(default_factory=lambda: ControlRange(0.0, 500.0, 5.0))
    input_area: ControlRange = field(default_factory=lambda: ControlRange(1.0, 50.0, 1.0))
    output_area: ControlRange = field(default_factory=lambda: ControlRange(10.0, 200.0, 1.0))
    default_input_force: float = 200.0
    default_input_area: float = 5.0
    default_output_area: float = 100.0

    def validate(self) -> tuple[bool, Optional[str]]:
        for name in ("input_force", "input_area", "output_area"):
            ok, err = getattr(self, name).validate(name)
            if not ok:
                return ok, err
        # areas are divisors, so zero must be unreachable from the sliders
        if self.input_area.min <= 0:
            return False, "input_area: min must be positive"
        if self.output_area.min <= 0:
            return False, "output_area: min must be positive"
        if self.input_force.min < 0:
            return False, "input_force: min must not be negative"
        for name in ("input_force", "input_area", "output_area"):
            rng = getattr(self, name)
            value = getattr(self, f"default_{name}")
            if not rng.min <= value <= rng.max:
                return False, f"default_{name} must lie inside its range"
        return True, None

    @property
    def max_input_force(self) -> float:
        return self.input_force.max


@dataclass
class TimingConfig:
    """Pump-hold and release repetition."""
    pump_step: float = 5.0       # N per tick
    pump_period: float = 0.05    # s
    release_step: float = 10.0   # N per tick
    release_period: float = 0.02  # s

    def validate(self) -> tuple[bool, Optional[str]]:
        for f in fields(self):
            if getattr(self, f.name) <= 0:
                return False, f"{f.name} must be positive"
        return True, None


@dataclass
class AnimationConfig:
    """
    Visual tuning for the piston animation.

    These numbers are chosen for how the press looks, not derived from
    volume conservation.
    """
    speed: float = 0.1
    realistic_speed: float = 0.02
    snap_epsilon: float = 0.001
    reference_dt: float = 1.0 / 60.0
    input_travel: float = 100.0       # px of left piston stroke
    visual_exaggeration: float = 5.0
    max_travel: float = 130.0         # px until the object meets the ceiling
    contact_margin: float = 5.0
    crushed_scale: float = 0.4

    def validate(self) -> tuple[bool, Optional[str]]:
        for name in ("speed", "realistic_speed"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                return False, f"{name} must be in (0, 1]"
        for name in ("snap_epsilon", "reference_dt", "input_travel",
                     "visual_exaggeration", "max_travel"):
            if getattr(self, name) <= 0:
                return False, f"{name} must be positive"
        if not 0 <= self.contact_margin < self.max_travel:
            return False, "contact_margin must be in [0, max_travel)"
        if not 0 < self.crushed_scale <= 1:
            return False, "crushed_scale must be in (0, 1]"
        return True, None


@dataclass
class PressConfig:
    """Complete configuration."""
    crush_threshold: float = 5000.0    # N
    pressure_conversion: float = 10.0  # 1 N/cm^2 = 10 kPa
    fluid_base_color: Tuple[int, int, int] = (59, 130, 246)
    fluid_high_pressure_color: Tuple[int, int, int] = (37, 99, 235)
    controls: ControlsConfig = field(default_factory=ControlsConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.crush_threshold <= 0:
            return False, "crush_threshold must be positive"
        if self.pressure_conversion <= 0:
            return False, "pressure_conversion must be positive"
        for name in ("fluid_base_color", "fluid_high_pressure_color"):
            color = getattr(self, name)
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                return False, f"{name} must be three values in 0..255"
        for section in (self.controls, self.timing, self.animation):
            ok, err = section.validate()
            if not ok:
                return ok, err
        return True, None


def _merge(base, raw: dict, section: str):
    """Return a copy of dataclass ``base`` with keys from ``raw`` applied."""
    known = {f.name for f in fields(base)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in {section}: {', '.join(sorted(unknown))}")
    return replace(base, **raw)


def config_from_dict(raw: Optional[dict]) -> PressConfig:
    """
    Build and validate a PressConfig from a plain mapping.

    Raises:
        ValueError: If a key is unknown or a value is invalid.
    """
    raw = dict(raw or {})
    controls_raw = dict(raw.pop("controls", None) or {})
    timing_raw = raw.pop("timing", None) or {}
    animation_raw = raw.pop("animation", None) or {}

    for name in ("input_force", "input_area", "output_area"):
        if name in controls_raw:
            controls_raw[name] = ControlRange(**controls_raw[name])

    for name in ("fluid_base_color", "fluid_high_pressure_color"):
        if name in raw:
            raw[name] = tuple(int(c) for c in raw[name])

    cfg = _merge(PressConfig(), raw, "press")
    cfg = replace(
        cfg,
        controls=_merge(cfg.controls, controls_raw, "controls"),
        timing=_merge(cfg.timing, timing_raw, "timing"),
        animation=_merge(cfg.animation, animation_raw, "animation"),
    )

    is_valid, err = cfg.validate()
    if not is_valid:
        raise ValueError(f"Invalid config: {err}")
    return cfg


def load_config(path: Path) -> PressConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated PressConfig.

    Raises:
        ValueError: If config is invalid.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    if raw is not None and not isinstance(raw, dict):
        raise ValueError("Config root must be a mapping")

    cfg = config_from_dict(raw)
    logger.info("Loaded press config from %s", path)
    return cfg
