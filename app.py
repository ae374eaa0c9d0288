"""Dash application: layout and server entry point."""

import dash
import plotly.graph_objects as go
from dash import dcc, html

from config import PRESETS, SWIMMING_POOL, VIEW_PRESETS
from logging_config import setup_logging

setup_logging()

app = dash.Dash(
    __name__,
    title="WaveSim — analog fluid surface",
    update_title=None,
)
server = app.server  # for gunicorn

# ── Blank surface (shown on load) ─────────────────────────────────────

_initial_surface = go.Figure()
_initial_surface.update_layout(
    margin=dict(l=0, r=0, t=0, b=0),
    xaxis=dict(visible=False),
    yaxis=dict(visible=False),
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgb({},{},{})".format(*SWIMMING_POOL.base_colour),
)

# ── Info card helper ──────────────────────────────────────────────────

_CARD = {
    "background": "#fff", "borderRadius": "8px",
    "border": "1px solid #e0e0e0", "padding": "14px 16px",
}


def _card(title, body, color="#1a73e8"):
    style = {**_CARD, "borderLeft": f"4px solid {color}"}
    return html.Div(style=style, children=[
        html.Div(title, style={"fontWeight": "700", "fontSize": "13px",
                                "marginBottom": "6px", "color": "#333"}),
        html.Div(body, style={"fontSize": "12px", "color": "#555",
                               "lineHeight": "1.55"}),
    ])


def _options(presets):
    return [{"label": name.replace("_", " ").title(), "value": name}
            for name in presets]


_BUTTON = {"padding": "9px 24px", "fontSize": "14px", "cursor": "pointer",
           "border": "none", "borderRadius": "6px", "fontWeight": "600"}

# ── Layout ────────────────────────────────────────────────────────────

app.layout = html.Div(
    style={"fontFamily": "system-ui, -apple-system, sans-serif",
           "margin": "0 auto", "maxWidth": "1100px", "padding": "16px"},
    children=[
        html.H2("WaveSim", style={"marginBottom": "2px", "letterSpacing": "-0.5px"}),
        html.P("An analog cellular automaton of fluid surface dynamics",
               style={"color": "#888", "marginTop": 0, "fontSize": "13px",
                      "marginBottom": "14px"}),

        html.Div(
            style={"display": "grid", "gridTemplateColumns": "1fr 1fr 1fr",
                   "gap": "10px", "marginBottom": "14px"},
            children=[
                _card("Surface Model",
                      "Each cell holds a height and a velocity. Every tick a "
                      "cell is pulled toward zero and toward its eight "
                      "neighbours (edge neighbours weigh π, corners 1), "
                      "the pull changes its velocity and the velocity moves "
                      "its height.",
                      "#1a73e8"),
                _card("Ripples",
                      "Disturbances are single-cell force generators that "
                      "trace one full sine period, so they leave no net "
                      "push behind. Moods differ only in how often ripples "
                      "appear, how long and strong they are, and damping.",
                      "#e8a21a"),
                _card("Interaction",
                      "In the Shimmer view, click the surface to drop a "
                      "ripple. The press slider stands in for how long the "
                      "pointer is held: longer presses give longer, "
                      "stronger ripples.",
                      "#7c3aed"),
            ],
        ),

        html.Div(
            style={"display": "flex", "alignItems": "center", "gap": "12px",
                   "marginBottom": "10px", "flexWrap": "wrap"},
            children=[
                dcc.Dropdown(id="mood-dropdown", options=_options(PRESETS),
                             value="drizzle", clearable=False,
                             style={"width": "160px"}),
                dcc.Dropdown(id="view-dropdown", options=_options(VIEW_PRESETS),
                             value="swimming_pool", clearable=False,
                             style={"width": "180px"}),
                html.Button("Start", id="start-button", n_clicks=0,
                            style={**_BUTTON, "background": "#1a73e8",
                                   "color": "white"}),
                html.Button("Pause", id="pause-button", n_clicks=0,
                            style={**_BUTTON, "background": "#eee",
                                   "color": "#333"}),
                html.Div(id="stats-text",
                         style={"fontSize": "12px", "color": "#666",
                                "minHeight": "20px"}),
            ],
        ),

        html.Div(
            style={"display": "flex", "alignItems": "center", "gap": "12px",
                   "marginBottom": "10px"},
            children=[
                html.Span("Press (ms)", style={"fontSize": "12px", "color": "#666"}),
                html.Div(dcc.Slider(id="press-slider", min=0, max=2000, step=50,
                                    value=200, marks={0: "0", 1000: "1000", 2000: "2000"}),
                         style={"width": "320px"}),
                html.Div(id="click-text", style={"fontSize": "12px", "color": "#666"}),
            ],
        ),

        dcc.Graph(id="surface-figure", figure=_initial_surface,
                  style={"height": "640px"},
                  config={"displayModeBar": False}),

        dcc.Interval(id="tick", interval=SWIMMING_POOL.step_period_ms,
                     disabled=True),
    ],
)

# Register callbacks
import callbacks  # noqa: F401, E402

if __name__ == "__main__":
    app.run(debug=True, port=8050)
