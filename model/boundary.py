"""Out-of-range cell addressing: absorbing edges or torus wraparound.

The point lookup (``getter_factory``) and the whole-grid scipy.ndimage mode
(``ndimage_mode``) express the same policy, so per-cell reads and the
vectorised update agree on what lies beyond the edge.
"""

from typing import Callable

import numpy as np


def mod(n: int, m: int) -> int:
    """True modulo: result in [0, m) for m > 0, including negative n."""
    return ((n % m) + m) % m


def getter_factory(cells: np.ndarray, is_torus: bool,
                   default: float = 0.0) -> Callable[[int, int], float]:
    """Build ``get(r, c)`` over ``cells``.

    On a torus the address wraps to the opposite edge; otherwise any address
    outside the grid reads as ``default`` (zero ambient magnitude at the
    edges).  Never mutates ``cells`` and accepts any integer coordinates.
    """
    rows, cols = cells.shape

    if is_torus:
        def get(r, c):
            return float(cells[mod(r, rows), mod(c, cols)])
    else:
        def get(r, c):
            if r < 0 or r >= rows or c < 0 or c >= cols:
                return default
            return float(cells[r, c])
    return get


def ndimage_mode(is_torus: bool) -> str:
    """scipy.ndimage boundary mode matching ``getter_factory``."""
    return "grid-wrap" if is_torus else "constant"
