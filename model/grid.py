"""Fixed-shape numeric grids with O(1) current/next role swapping."""

import numpy as np


def allocate(rows: int, cols: int, fill: float = 0.0) -> np.ndarray:
    """Return a (rows, cols) float64 grid filled with ``fill``."""
    return np.full((rows, cols), fill, dtype=np.float64)


class BufferPair:
    """Current and next grids of one quantity.

    ``swap()`` exchanges which array is "current"; no elements are copied,
    so after a swap ``current`` is the array previously held as ``next``.
    """

    __slots__ = ("current", "next")

    def __init__(self, rows: int, cols: int, fill: float = 0.0):
        self.current = allocate(rows, cols, fill)
        self.next = allocate(rows, cols, fill)

    def swap(self) -> None:
        self.current, self.next = self.next, self.current

    @property
    def shape(self):
        return self.current.shape
