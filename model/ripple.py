"""Single-cell sinusoidal force generators with a finite lifetime.

A ripple pushes its cell through one full sine period: positive force, then
negative, then back to zero, so the net impulse over its lifetime is zero
and the surface is left without a permanent bias.
"""

import math
from dataclasses import dataclass, field

import numpy as np

from config import WaveConfig


def _cell_index(frac, n):
    # A fraction of exactly 1.0 addresses the last cell, not one past it
    return min(int(math.floor(frac * n)), n - 1)


@dataclass
class Ripple:
    row: int
    col: int
    wavelength: int               # ticks for one full cycle, >= 1
    magnitude: float              # peak force
    remaining: int = field(init=False)   # ticks left, starts at wavelength

    def __post_init__(self):
        self.wavelength = int(self.wavelength)
        if self.wavelength < 1:
            raise ValueError(f"ripple wavelength must be >= 1, got {self.wavelength}")
        if not math.isfinite(self.magnitude):
            raise ValueError(f"ripple magnitude must be finite, got {self.magnitude!r}")
        self.remaining = self.wavelength

    @classmethod
    def spawn(cls, config: WaveConfig, rows: int, cols: int,
              rng: np.random.Generator) -> "Ripple":
        """Resolve a new ripple's parameters from ``config``.

        Draws from ``rng`` in the order wavelength, row, col, magnitude
        (only for the fields the config leaves random).
        """
        if config.wavelength < 0:
            wavelength = 1 + int(math.floor(rng.random() * -config.wavelength))
        else:
            wavelength = 1 + int(math.floor(config.wavelength))

        row_frac = rng.random() if config.spawn_row is None else config.spawn_row
        col_frac = rng.random() if config.spawn_col is None else config.spawn_col

        if config.magnitude < 0:
            magnitude = rng.random() * -config.magnitude
        else:
            magnitude = float(config.magnitude)

        return cls(row=_cell_index(row_frac, rows), col=_cell_index(col_frac, cols),
                   wavelength=wavelength, magnitude=magnitude)

    @property
    def progress(self) -> float:
        """Fraction of the cycle completed, in [0, 1)."""
        return (self.wavelength - self.remaining) / self.wavelength

    def apply_force(self, force: np.ndarray) -> bool:
        """Write this tick's force into ``force`` and count down.

        Overwrites the cell rather than accumulating: a later ripple on the
        same cell in the same tick replaces an earlier one.

        Returns
        -------
        bool
            True while the ripple still has ticks left in its cycle.
        """
        force[self.row, self.col] = self.magnitude * math.sin(self.progress * 2 * math.pi)
        self.remaining -= 1
        return self.remaining != 0
