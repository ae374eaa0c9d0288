"""Dash callbacks: start a mood, tick on the interval timer, draw the surface.

One Simulation lives for the whole server process (single-viewer tool).
Ticks arrive from a dcc.Interval; a tick that lands while the previous one
is still running is skipped by the Simulation rather than queued.
"""

import logging
import time

import numpy as np
import plotly.graph_objects as go
from dash import Input, Output, State, callback, no_update

from config import PRESETS, SWIMMING_POOL, VIEW_PRESETS
from model.simulation import Simulation

logger = logging.getLogger(__name__)

SIM = Simulation(SWIMMING_POOL)

# ── Colour helpers ─────────────────────────────────────────────────────

# Colour factor either side of flat calm when opacity does the shading
_TROUGH_FACTOR = 0.8
_PEAK_FACTOR = 1.2


def shade(mag, base_colour, opacity):
    """Map magnitudes to an RGBA image.

    Magnitudes are normally within [-1, 1]: flat calm is 0, large peaks
    and troughs reach 1 and -1 but may exceed them.

    Parameters
    ----------
    mag : ndarray (rows, cols)
    base_colour : (r, g, b) tuple, 0-255
    opacity : float in [0, 1]
        Below 1, transparency carries the wave height and the colour only
        distinguishes peaks from troughs.

    Returns
    -------
    rgba : ndarray (rows, cols, 4)
        Integer-valued RGB channels in [0, 255], alpha in [0, 1].
    """
    mag = np.asarray(mag, dtype=np.float64)
    if opacity < 1:
        alpha = np.clip(opacity + np.abs(mag) * (1 - opacity), 0, 1)
        factor = np.where(mag < 0, _TROUGH_FACTOR, _PEAK_FACTOR)
    else:
        alpha = np.ones_like(mag)
        factor = mag + 1  # 0..2 around the base colour

    base = np.asarray(base_colour, dtype=np.float64)
    rgb = np.trunc(np.clip(factor[..., None] * base, 0, 255))

    rgba = np.empty(mag.shape + (4,))
    rgba[..., :3] = rgb
    rgba[..., 3] = alpha
    return rgba


# ── Figure builders ──────────────────────────────────────────────────

def _surface_layout():
    return dict(
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        dragmode=False,
    )


def build_surface(mag, view):
    fig = go.Figure(go.Image(
        z=shade(mag, view.base_colour, view.opacity),
        colormodel="rgba",
        hoverinfo="skip" if not view.interactive else "x+y",
    ))
    fig.update_layout(**_surface_layout())
    return fig


def _stats_line(stats):
    return (f"tick {stats.tick:,} · {stats.n_ripples} ripple(s) · "
            f"height {stats.min_magnitude:+.2f} .. {stats.max_magnitude:+.2f}")


# ── Callback: Start button ───────────────────────────────────────────

@callback(
    Output("tick", "interval"),
    Output("tick", "disabled"),
    Output("surface-figure", "figure", allow_duplicate=True),
    Output("pause-button", "children", allow_duplicate=True),
    Input("start-button", "n_clicks"),
    State("mood-dropdown", "value"),
    State("view-dropdown", "value"),
    prevent_initial_call=True,
)
def start_simulation(n_clicks, mood, view_name):
    view = VIEW_PRESETS[view_name]
    seed = int(time.time() * 1000) % (2**31)
    SIM.view = view
    SIM.is_paused = False
    model = SIM.start(PRESETS[mood], seed=seed)
    logger.info("Started mood %r in view %r", mood, view_name)
    return view.step_period_ms, False, build_surface(model.magnitude, view), "Pause"


# ── Callback: Pause button ───────────────────────────────────────────

@callback(
    Output("pause-button", "children"),
    Input("pause-button", "n_clicks"),
    prevent_initial_call=True,
)
def toggle_pause(n_clicks):
    return "Resume" if SIM.toggle_pause() else "Pause"


# ── Callback: timer tick ─────────────────────────────────────────────

def tick_update(sim):
    """Step ``sim`` once; (figure, stats) or no_update when the tick was skipped."""
    if not sim.step():
        return no_update, no_update
    model = sim.model
    return build_surface(model.magnitude, sim.view), _stats_line(model.stats())


@callback(
    Output("surface-figure", "figure"),
    Output("stats-text", "children"),
    Input("tick", "n_intervals"),
    prevent_initial_call=True,
)
def on_tick(n_intervals):
    return tick_update(SIM)


# ── Callback: click to drop a ripple ─────────────────────────────────

def click_update(sim, click_data, press_ms):
    """Drop a ripple at the clicked cell of an interactive view."""
    if not click_data or not sim.view.interactive:
        return no_update
    point = click_data["points"][0]
    # Image pixels are cells, so the figure is cols x rows "pixels" wide
    row, col = sim.to_grid_pos(point["x"], point["y"], sim.view.cols, sim.view.rows)
    ripple = sim.add_ripple(row, col, press_ms)
    if ripple is None:
        return no_update
    return (f"Ripple at ({ripple.row}, {ripple.col}): wavelength {ripple.wavelength}, "
            f"magnitude {ripple.magnitude:.1f}")


@callback(
    Output("click-text", "children"),
    Input("surface-figure", "clickData"),
    State("press-slider", "value"),
    prevent_initial_call=True,
)
def on_click(click_data, press_ms):
    return click_update(SIM, click_data, press_ms)
