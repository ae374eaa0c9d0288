import numpy as np
import pytest

from config import DRIZZLE, SHIMMER, TSUNAMI, ViewConfig
from model.simulation import RunResult, Simulation, press_ripple, run_model

SMALL = ViewConfig(interactive=True, base_colour=(10, 20, 30), opacity=0.5,
                   step_period_ms=10, rows=12, cols=16)


def test_step_before_start_is_skipped():
    sim = Simulation(SMALL)
    assert sim.step() is False
    assert sim.magnitude is None
    assert sim.add_ripple(1, 1, 100) is None


def test_step_runs_one_tick():
    sim = Simulation(SMALL)
    model = sim.start(TSUNAMI, seed=3)
    assert model.magnitude.shape == (12, 16)
    assert sim.step() is True
    assert model.tick == 1
    assert len(model.ripples) == 1


def test_paused_simulation_does_not_tick():
    sim = Simulation(SMALL)
    model = sim.start(DRIZZLE, seed=3)
    assert sim.toggle_pause() is True
    assert sim.step() is False
    assert model.tick == 0
    assert sim.toggle_pause() is False
    assert sim.step() is True


def test_overlapping_tick_is_skipped():
    sim = Simulation(SMALL)
    model = sim.start(DRIZZLE, seed=3)
    sim._tick_lock.acquire()
    try:
        assert sim.step() is False
    finally:
        sim._tick_lock.release()
    assert model.tick == 0


def test_stop_drops_model():
    sim = Simulation(SMALL)
    sim.start(DRIZZLE)
    sim.stop()
    assert sim.model is None
    assert sim.step() is False


@pytest.mark.parametrize("delay, wavelength, magnitude", [
    (0, 10, 5.0),
    (200, 20, 10.0),
    (1000, 50, 30.0),
    (5000, 50, 50.0),
])
def test_press_ripple_mapping(delay, wavelength, magnitude):
    ripple = press_ripple(3, 4, delay)
    assert ripple.wavelength == wavelength
    assert ripple.remaining == wavelength
    assert ripple.magnitude == pytest.approx(magnitude)


def test_add_ripple_clamps_into_grid():
    sim = Simulation(SMALL)
    model = sim.start(DRIZZLE)
    ripple = sim.add_ripple(-5, 99, 0)
    assert (ripple.row, ripple.col) == (0, 15)
    assert ripple in model.ripples


def test_to_grid_pos():
    sim = Simulation(SHIMMER)
    assert sim.to_grid_pos(0, 0, 800, 600) == (0, 0)
    assert sim.to_grid_pos(799, 599, 800, 600) == (199, 199)
    assert sim.to_grid_pos(400, 150, 800, 600) == (50, 100)


def test_run_model_summary():
    result = run_model(DRIZZLE, 60, rows=20, cols=20, seed=2)
    assert isinstance(result, RunResult)
    assert result.n_ticks == 60
    assert result.peak_abs.shape == (60,)
    assert result.magnitude.shape == (20, 20)
    assert result.finite
    assert result.magnitude.flags.writeable
    assert np.isfinite(result.peak_abs).all()
