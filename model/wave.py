"""Wave model: grid state, ripple force generators and the per-tick update.

Each tick every cell is pulled toward zero and toward the weighted average
of its eight neighbours (orthogonal neighbours weigh pi, diagonals 1).  The
resulting force changes the cell's velocity, and the velocity moves its
magnitude.  The neighbour pass is a single scipy.ndimage correlation over
the start-of-tick magnitudes, so no cell sees a neighbour's updated value
within the same tick.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import ndimage

from config import (
    DRIZZLE, FORCE_INFLUENCE, GLOBAL_SEED,
    WaveConfig, check_grid_shape,
)
from model.boundary import getter_factory, ndimage_mode
from model.grid import BufferPair, allocate
from model.ripple import Ripple

logger = logging.getLogger(__name__)

_NEIGHBOUR_WEIGHTS = np.array([
    [1.0,     math.pi, 1.0],
    [math.pi, 0.0,     math.pi],
    [1.0,     math.pi, 1.0],
])
# Total neighbour weight; a flat neighbourhood exactly cancels the self term
_SELF_WEIGHT = 4 + 4 * math.pi


@dataclass
class SurfaceStats:
    tick: int
    n_ripples: int
    min_magnitude: float
    max_magnitude: float
    mean_abs_magnitude: float
    finite: bool


def _read_only(a):
    view = a.view()
    view.flags.writeable = False
    return view


class WaveModel:
    """Analog cellular-automaton model of a fluid surface.

    Parameters
    ----------
    rows, cols : int
        Grid shape, fixed for the lifetime of the model.
    config : WaveConfig
        Ripple generation, damping and topology.  Defaults to DRIZZLE.
    rng : numpy.random.Generator, optional
        Source of all randomness.  Built from ``seed`` when omitted.
    seed : int, optional
        Seed for the default generator (GLOBAL_SEED when omitted).
    """

    def __init__(self, rows: int, cols: int, config: WaveConfig = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        check_grid_shape(rows, cols)
        self.rows = rows
        self.cols = cols
        self.config = config if config is not None else DRIZZLE
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else GLOBAL_SEED)
        self.rng = rng

        self._force = allocate(rows, cols)          # external + restoring force
        self._velocity = BufferPair(rows, cols)
        self._magnitude = BufferPair(rows, cols)    # amplitude of each cell
        self._neighbours = allocate(rows, cols)     # scratch for the weighted sum
        self._mode = ndimage_mode(self.config.is_torus)

        self._ripples = []
        # A negative rate means "generate |rate| once, at the beginning"
        self._to_spawn = -self.config.ripples if self.config.ripples < 0 else 0.0
        self.tick = 0

        logger.info("Wave model %dx%d created (torus=%s, ripples=%s, damping=%s)",
                    rows, cols, self.config.is_torus, self.config.ripples,
                    self.config.damping)

    # ── Read access ────────────────────────────────────────────────────

    @property
    def magnitude(self) -> np.ndarray:
        """Current magnitudes (read-only view, valid until the next tick)."""
        return _read_only(self._magnitude.current)

    @property
    def velocity(self) -> np.ndarray:
        return _read_only(self._velocity.current)

    @property
    def force(self) -> np.ndarray:
        return _read_only(self._force)

    @property
    def ripples(self):
        return tuple(self._ripples)

    def getter(self, name: str, default: float = 0.0):
        """Boundary-aware ``get(r, c)`` over the current force, velocity or magnitude."""
        cells = {
            "force": self._force,
            "velocity": self._velocity.current,
            "magnitude": self._magnitude.current,
        }[name]
        return getter_factory(cells, self.config.is_torus, default)

    def stats(self) -> SurfaceStats:
        m = self._magnitude.current
        return SurfaceStats(
            tick=self.tick,
            n_ripples=len(self._ripples),
            min_magnitude=float(m.min()),
            max_magnitude=float(m.max()),
            mean_abs_magnitude=float(np.abs(m).mean()),
            finite=bool(np.isfinite(m).all() and np.isfinite(self._velocity.current).all()),
        )

    # ── Mutation ───────────────────────────────────────────────────────

    def seed_state(self, magnitude=None, velocity=None) -> None:
        """Overwrite the current magnitude and/or velocity grids."""
        for name, values, pair in (("magnitude", magnitude, self._magnitude),
                                   ("velocity", velocity, self._velocity)):
            if values is None:
                continue
            values = np.asarray(values, dtype=np.float64)
            if values.shape != pair.shape:
                raise ValueError(f"{name} must have shape {pair.shape}, got {values.shape}")
            np.copyto(pair.current, values)

    def insert_ripple(self, ripple: Ripple) -> None:
        """Add an externally built ripple (e.g. from a pointer press)."""
        if not (0 <= ripple.row < self.rows and 0 <= ripple.col < self.cols):
            raise ValueError(f"ripple at ({ripple.row}, {ripple.col}) lies outside "
                             f"the {self.rows}x{self.cols} grid")
        self._ripples.append(ripple)

    def generate_forces(self) -> None:
        """Spawn due ripples and write their forces into the force grid.

        Normally called before each ``advance()``; may be skipped when
        another source of disturbance is used.
        """
        conf = self.config
        if conf.ripples > 0:
            self._to_spawn += conf.ripples

        while self._to_spawn >= 1:
            ripple = Ripple.spawn(conf, self.rows, self.cols, self.rng)
            self._ripples.append(ripple)
            self._to_spawn -= 1
            logger.debug("Spawned ripple at (%d, %d), wavelength %d, magnitude %.3f",
                         ripple.row, ripple.col, ripple.wavelength, ripple.magnitude)

        survivors = []
        for ripple in self._ripples:
            if ripple.apply_force(self._force):
                survivors.append(ripple)
        retired = len(self._ripples) - len(survivors)
        if retired:
            logger.debug("Retired %d ripple(s), %d active", retired, len(survivors))
        self._ripples = survivors

    def advance(self) -> None:
        """Advance the whole grid by one synchronous tick."""
        F = self._force
        V, M = self._velocity, self._magnitude
        m = M.current

        # Dampen the velocity
        np.multiply(V.current, 1 - self.config.damping, out=V.next)

        # Pull toward zero and toward the neighbourhood average in fixed
        # proportion; neighbours are read from the start-of-tick magnitudes
        ndimage.correlate(m, _NEIGHBOUR_WEIGHTS, output=self._neighbours,
                          mode=self._mode, cval=0.0)
        F += self._neighbours - m * _SELF_WEIGHT

        V.next += F * FORCE_INFLUENCE
        np.add(m, V.next, out=M.next)

        # Forces last a single tick
        F.fill(0.0)

        V.swap()
        M.swap()
        self.tick += 1
