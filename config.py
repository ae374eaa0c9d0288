"""Model constants, wave/view configuration records, and presets."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

# (0-0.1) How strongly accumulated force changes velocity each tick.
# Higher values propagate waves faster; the resulting pattern is unchanged.
FORCE_INFLUENCE = 0.1

# Random seed for reproducibility
GLOBAL_SEED = 42

# Pointer press → ripple mapping (milliseconds held)
PRESS_WAVELENGTH_DIVISOR = 20     # 1 s for max wavelength
PRESS_MAGNITUDE_DIVISOR = 40      # 2 s for max magnitude
PRESS_WAVELENGTH_RANGE = (10, 50)
PRESS_MAGNITUDE_RANGE = (5, 50)


class ConfigError(ValueError):
    """Raised when a configuration record or grid shape is unusable."""


def _check_finite(name, value):
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value!r}")


def _check_fraction(name, value):
    if value is None:
        return
    _check_finite(name, value)
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must lie in [0, 1] or be None, got {value!r}")


@dataclass(frozen=True)
class WaveConfig:
    """Behaviour of one wave model instance.

    ``ripples`` > 0 spawns that many ripples per tick (fractions accumulate);
    < 0 spawns ``|ripples|`` once at start.  Negative ``wavelength`` or
    ``magnitude`` means "draw uniformly in [0, |value|)" per ripple.
    ``spawn_row`` / ``spawn_col`` of None choose a random cell per ripple.
    """
    is_torus: bool
    ripples: float
    wavelength: float
    magnitude: float
    damping: float
    spawn_row: Optional[float] = None
    spawn_col: Optional[float] = None

    def __post_init__(self):
        for name in ("ripples", "wavelength", "magnitude", "damping"):
            _check_finite(name, getattr(self, name))
        if not 0.0 <= self.damping <= 1.0:
            raise ConfigError(f"damping must lie in [0, 1], got {self.damping!r}")
        _check_fraction("spawn_row", self.spawn_row)
        _check_fraction("spawn_col", self.spawn_col)


@dataclass(frozen=True)
class ViewConfig:
    """Resolution, colour and tick period of a rendered simulation."""
    interactive: bool
    base_colour: Tuple[int, int, int]
    opacity: float
    step_period_ms: int
    rows: int
    cols: int

    def __post_init__(self):
        if len(self.base_colour) != 3 or not all(0 <= ch <= 255 for ch in self.base_colour):
            raise ConfigError(f"base_colour must be three 0-255 channels, got {self.base_colour!r}")
        _check_finite("opacity", self.opacity)
        if not 0.0 <= self.opacity <= 1.0:
            raise ConfigError(f"opacity must lie in [0, 1], got {self.opacity!r}")
        if self.step_period_ms <= 0:
            raise ConfigError(f"step_period_ms must be positive, got {self.step_period_ms!r}")
        check_grid_shape(self.rows, self.cols)


def check_grid_shape(rows, cols):
    for name, n in (("rows", rows), ("cols", cols)):
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise ConfigError(f"{name} must be a positive integer, got {n!r}")


# ── Wave model presets ──────────────────────────────────────────────────

TEST = WaveConfig(is_torus=False, ripples=-1, wavelength=40, magnitude=200,
                  damping=0.05, spawn_row=0.03, spawn_col=0.95)

DRIZZLE = WaveConfig(is_torus=False, ripples=1 / 20, wavelength=10,
                     magnitude=-20, damping=0.02)

STORM = WaveConfig(is_torus=False, ripples=1, wavelength=10,
                   magnitude=-30, damping=0.01)

# A single drop
TSUNAMI = WaveConfig(is_torus=False, ripples=-1, wavelength=40,
                     magnitude=30, damping=0)

# 20 random points on a donut
OCEAN = WaveConfig(is_torus=True, ripples=-20, wavelength=-80,
                   magnitude=-10, damping=0)

PRESETS = {
    "test": TEST,
    "drizzle": DRIZZLE,
    "storm": STORM,
    "tsunami": TSUNAMI,
    "ocean": OCEAN,
}

# ── View presets ────────────────────────────────────────────────────────

SWIMMING_POOL = ViewConfig(interactive=False, base_colour=(19, 128, 187),
                           opacity=1, step_period_ms=30, rows=200, cols=200)

SHIMMER = ViewConfig(interactive=True, base_colour=(128, 128, 128),
                     opacity=0, step_period_ms=50, rows=200, cols=200)

VIEW_PRESETS = {
    "swimming_pool": SWIMMING_POOL,
    "shimmer": SHIMMER,
}
