"""Tick driver and headless batch runner around a WaveModel.

``Simulation`` is what a renderer talks to: it owns the model, serialises
ticks, pauses, and turns pointer presses into ripples.  ``run_model`` runs a
preset without any renderer and keeps a per-tick summary.
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from config import (
    GLOBAL_SEED,
    PRESS_MAGNITUDE_DIVISOR, PRESS_MAGNITUDE_RANGE,
    PRESS_WAVELENGTH_DIVISOR, PRESS_WAVELENGTH_RANGE,
    SWIMMING_POOL, ViewConfig, WaveConfig,
)
from model.ripple import Ripple
from model.wave import WaveModel

logger = logging.getLogger(__name__)


def _bound(v, lo, hi):
    return max(min(v, hi), lo)


def press_ripple(row: int, col: int, delay_ms: float) -> Ripple:
    """Ripple for a pointer held ``delay_ms`` on a cell: longer presses
    give longer, stronger ripples."""
    wavelength = int(_bound(delay_ms / PRESS_WAVELENGTH_DIVISOR + PRESS_WAVELENGTH_RANGE[0],
                            *PRESS_WAVELENGTH_RANGE))
    magnitude = _bound(delay_ms / PRESS_MAGNITUDE_DIVISOR + PRESS_MAGNITUDE_RANGE[0],
                       *PRESS_MAGNITUDE_RANGE)
    return Ripple(row=row, col=col, wavelength=wavelength, magnitude=float(magnitude))


class Simulation:
    """Drives one wave model at a time for a renderer.

    Create it with a view config, then ``start()`` a wave config.  Each
    ``step()`` runs one tick unless paused or another tick is still running;
    overlapping ticks are skipped, never run concurrently.
    """

    def __init__(self, view: ViewConfig = None):
        self.view = view if view is not None else SWIMMING_POOL
        self.model: Optional[WaveModel] = None
        self.is_paused = False
        self._tick_lock = threading.Lock()

    def start(self, wave_config: WaveConfig, seed: Optional[int] = None) -> WaveModel:
        """Replace any running model with a fresh one for ``wave_config``."""
        with self._tick_lock:
            self.model = WaveModel(self.view.rows, self.view.cols, wave_config, seed=seed)
        logger.info("Simulation started (%dx%d, seed=%s)",
                    self.view.rows, self.view.cols, seed)
        return self.model

    def stop(self) -> None:
        with self._tick_lock:
            self.model = None
        logger.info("Simulation stopped")

    def toggle_pause(self) -> bool:
        self.is_paused = not self.is_paused
        logger.info("Simulation %s", "paused" if self.is_paused else "resumed")
        return self.is_paused

    def step(self) -> bool:
        """Run one tick. Returns False when the tick was skipped."""
        if self.is_paused or self.model is None:
            return False
        if not self._tick_lock.acquire(blocking=False):
            logger.debug("Previous tick still running, skipping")
            return False
        try:
            # start()/stop() may have swapped the model while we waited
            model = self.model
            if model is None:
                return False
            model.generate_forces()
            model.advance()
            return True
        finally:
            self._tick_lock.release()

    def add_ripple(self, row: int, col: int, delay_ms: float = 0.0) -> Optional[Ripple]:
        """Insert a press ripple, clamping the cell into the grid."""
        model = self.model
        if model is None:
            return None
        row = int(_bound(row, 0, model.rows - 1))
        col = int(_bound(col, 0, model.cols - 1))
        ripple = press_ripple(row, col, delay_ms)
        with self._tick_lock:
            model.insert_ripple(ripple)
        return ripple

    def to_grid_pos(self, x: float, y: float, width: float, height: float) -> Tuple[int, int]:
        """Convert a surface pixel position into a (row, col) cell."""
        return (int(math.floor(y * self.view.rows / height)),
                int(math.floor(x * self.view.cols / width)))

    @property
    def magnitude(self) -> Optional[np.ndarray]:
        return None if self.model is None else self.model.magnitude


# ── Headless batch runs ───────────────────────────────────────────────

@dataclass
class RunResult:
    magnitude: np.ndarray         # (rows, cols) final magnitudes
    peak_abs: np.ndarray          # (n_ticks,) max |magnitude| after each tick
    n_ripples: np.ndarray         # (n_ticks,) active ripples after each tick
    n_ticks: int
    finite: bool


def run_model(config: WaveConfig, n_ticks: int, rows: int = None,
              cols: int = None, seed: int = None) -> RunResult:
    rows = rows if rows is not None else SWIMMING_POOL.rows
    cols = cols if cols is not None else SWIMMING_POOL.cols
    seed = seed if seed is not None else GLOBAL_SEED

    model = WaveModel(rows, cols, config, seed=seed)

    peak_abs = np.full(n_ticks, np.nan)
    n_ripples = np.zeros(n_ticks, dtype=np.int32)

    for t in range(n_ticks):
        model.generate_forces()
        model.advance()
        peak_abs[t] = np.abs(model.magnitude).max()
        n_ripples[t] = len(model.ripples)

    stats = model.stats()
    return RunResult(
        magnitude=np.array(model.magnitude),
        peak_abs=peak_abs,
        n_ripples=n_ripples,
        n_ticks=n_ticks,
        finite=stats.finite,
    )
