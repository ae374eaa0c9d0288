import math

import pytest

from config import (
    PRESETS, VIEW_PRESETS, ConfigError, ViewConfig, WaveConfig,
)


def _wave(**kw):
    base = dict(is_torus=False, ripples=1, wavelength=10, magnitude=5, damping=0.1)
    base.update(kw)
    return WaveConfig(**base)


def test_presets_are_valid():
    assert set(PRESETS) == {"test", "drizzle", "storm", "tsunami", "ocean"}
    assert PRESETS["ocean"].is_torus
    assert PRESETS["drizzle"].spawn_row is None
    assert set(VIEW_PRESETS) == {"swimming_pool", "shimmer"}


@pytest.mark.parametrize("kw", [
    dict(damping=-0.1),
    dict(damping=1.5),
    dict(damping=math.nan),
    dict(wavelength=math.inf),
    dict(magnitude=math.nan),
    dict(ripples=-math.inf),
    dict(spawn_row=1.2),
    dict(spawn_col=-0.01),
    dict(spawn_row=math.nan),
])
def test_bad_wave_config_rejected(kw):
    with pytest.raises(ConfigError):
        _wave(**kw)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        _wave(damping=2)


def test_wave_config_is_frozen():
    conf = _wave()
    with pytest.raises(AttributeError):
        conf.damping = 0.5


@pytest.mark.parametrize("kw", [
    dict(opacity=1.5),
    dict(step_period_ms=0),
    dict(rows=0),
    dict(cols=-3),
    dict(base_colour=(0, 0, 300)),
    dict(base_colour=(0, 0)),
])
def test_bad_view_config_rejected(kw):
    base = dict(interactive=False, base_colour=(1, 2, 3), opacity=1,
                step_period_ms=30, rows=10, cols=10)
    base.update(kw)
    with pytest.raises(ConfigError):
        ViewConfig(**base)
