import numpy as np
import pytest

from model.boundary import getter_factory, mod, ndimage_mode
from model.grid import BufferPair, allocate


def test_allocate_fills_shape():
    g = allocate(3, 4, fill=2.5)
    assert g.shape == (3, 4)
    assert g.dtype == np.float64
    assert np.all(g == 2.5)
    assert np.all(allocate(2, 2) == 0)


def test_swap_exchanges_references_without_copying():
    pair = BufferPair(2, 3)
    cur, nxt = pair.current, pair.next
    nxt[1, 1] = 7.0
    pair.swap()
    assert pair.current is nxt
    assert pair.next is cur
    assert pair.current[1, 1] == 7.0
    pair.swap()
    assert pair.current is cur


@pytest.mark.parametrize("n, m, expected", [
    (5, 3, 2), (-1, 3, 2), (-3, 3, 0), (-7, 3, 2), (0, 4, 0), (-13, 5, 2),
])
def test_mod_is_non_negative(n, m, expected):
    assert mod(n, m) == expected


@pytest.fixture
def cells():
    return np.arange(20, dtype=np.float64).reshape(4, 5)


def test_bounded_getter_returns_default_off_grid(cells):
    get = getter_factory(cells, is_torus=False)
    rows, cols = cells.shape
    for c in range(cols):
        assert get(-1, c) == 0
        assert get(rows, c) == 0
    assert get(2, -1) == 0
    assert get(2, cols) == 0
    assert get(-1000, 10**6) == 0
    assert get(1, 2) == cells[1, 2]


def test_bounded_getter_custom_default(cells):
    get = getter_factory(cells, is_torus=False, default=-3.0)
    assert get(-1, 0) == -3.0


def test_torus_getter_wraps(cells):
    get = getter_factory(cells, is_torus=True)
    rows, cols = cells.shape
    for c in range(cols):
        assert get(-1, c) == get(rows - 1, c)
        assert get(rows, c) == get(0, c)
    assert get(0, -1) == cells[0, cols - 1]
    assert get(-rows * 7 - 1, cols * 3 + 2) == cells[rows - 1, 2]


def test_getter_does_not_mutate(cells):
    before = cells.copy()
    for get in (getter_factory(cells, True), getter_factory(cells, False)):
        get(-2, 9)
        get(1, 1)
    np.testing.assert_array_equal(cells, before)


def test_ndimage_mode():
    assert ndimage_mode(True) == "grid-wrap"
    assert ndimage_mode(False) == "constant"
