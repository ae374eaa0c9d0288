"""Run a wave preset without a renderer and report how the surface behaved.

Usage:  python headless.py [preset] [ticks]
        python headless.py storm 1000
"""

import logging
import sys
import time

from config import PRESETS
from logging_config import setup_logging
from model.simulation import run_model

logger = logging.getLogger("headless")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    name = argv[0] if argv else "drizzle"
    ticks_arg = argv[1] if len(argv) > 1 else "1000"

    setup_logging()
    if name not in PRESETS:
        logger.error("Unknown preset %r (choose from %s)", name, ", ".join(PRESETS))
        return 2
    try:
        n_ticks = int(ticks_arg)
    except ValueError:
        n_ticks = -1
    if n_ticks < 0:
        logger.error("Tick count must be a non-negative integer, got %r", ticks_arg)
        return 2

    logger.info("Running %s for %d ticks ...", name, n_ticks)
    t0 = time.perf_counter()
    result = run_model(PRESETS[name], n_ticks)
    elapsed = time.perf_counter() - t0

    logger.info("  %.2f ms/tick, peak |height| %.3f, final peak %.3f, "
                "max %d ripple(s) active",
                1000 * elapsed / max(n_ticks, 1),
                result.peak_abs.max() if n_ticks else 0.0,
                result.peak_abs[-1] if n_ticks else 0.0,
                result.n_ripples.max() if n_ticks else 0)
    if not result.finite:
        logger.error("Surface became non-finite")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
