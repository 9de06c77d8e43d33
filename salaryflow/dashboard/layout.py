"""Dash layout for the salary dashboard."""

from dash import dcc, html

from salaryflow.config import DashboardConfig
from salaryflow.pipeline import DashboardData
from salaryflow.renderers.figures import bar_figure, entrance_transition, line_figure
from salaryflow.state.coordinator import DashboardState, initial_state

BAR_CHART_ID = "bar-chart"
LINE_CHART_ID = "line-chart"
SANKEY_ID = "sankey-diagram"
SANKEY_STATUS_ID = "sankey-status"
SELECTION_STORE_ID = "selection-store"
PREVIOUS_SELECTION_STORE_ID = "previous-selection-store"
TRANSITION_STORE_ID = "transition-store"
RENDERED_STORE_ID = "rendered-store"
CLOCK_ID = "transition-clock"
ENTRANCE_CLOCK_ID = "entrance-clock"

# dcc.Interval misbehaves with a zero interval
MIN_TICK_MS = 50

GRAPH_CONFIG = {"displayModeBar": False, "responsive": True}


def tick_interval(duration_ms: int) -> int:
    return max(duration_ms, MIN_TICK_MS)


def animation_options(duration_ms: int) -> dict:
    """Options dcc.Graph passes to Plotly.animate when its figure changes."""
    return {"frame": {"redraw": False}, "transition": entrance_transition(duration_ms)}


def build_layout(data: DashboardData, config: DashboardConfig, state: DashboardState | None = None) -> html.Div:
    """Three chart regions plus the stores and clocks that drive the animations.

    The bar and line charts start from their entrance frames; a one-shot
    clock swaps in the real figures, which dcc.Graph animates towards.
    """
    state = state or initial_state(config.year_bounds)
    entrance_ms = config.timings.entrance_ms
    bar_fig = bar_figure(data.bar_spec(state.selection), entrance=True, transition_ms=entrance_ms)
    line_fig = line_figure(data.line_spec(), entrance=True, transition_ms=entrance_ms)
    graph_animation = animation_options(entrance_ms)

    return html.Div(
        className="app-root",
        children=[
            html.Header(
                className="app-header",
                children=[
                    html.H1(config.title),
                    html.P(
                        f"{len(data.rows):,} records. Click bars to choose experience levels, "
                        "brush the trend chart to choose years.",
                        className="app-subtitle",
                    ),
                ],
            ),
            html.Div(
                className="charts-row",
                children=[
                    html.Div(
                        className="panel overview",
                        children=[
                            dcc.Graph(
                                id=BAR_CHART_ID,
                                figure=bar_fig,
                                config=GRAPH_CONFIG,
                                animate=True,
                                animation_options=graph_animation,
                            ),
                        ],
                    ),
                    html.Div(
                        className="panel trends",
                        children=[
                            dcc.Graph(
                                id=LINE_CHART_ID,
                                figure=line_fig,
                                config=GRAPH_CONFIG,
                                animate=True,
                                animation_options=graph_animation,
                            ),
                        ],
                    ),
                ],
            ),
            html.Div(
                className="panel sankey",
                children=[
                    html.Div(id=SANKEY_STATUS_ID, className="sankey-status"),
                    dcc.Graph(id=SANKEY_ID, config=GRAPH_CONFIG),
                ],
            ),
            dcc.Store(id=SELECTION_STORE_ID, data=state.selection.to_store()),
            dcc.Store(id=PREVIOUS_SELECTION_STORE_ID, data=None),
            dcc.Store(id=TRANSITION_STORE_ID, data=state.transition.to_store()),
            dcc.Store(id=RENDERED_STORE_ID, data=None),
            dcc.Interval(
                id=CLOCK_ID,
                interval=tick_interval(config.timings.duration_for(state.transition.stage)),
                n_intervals=0,
                disabled=not state.is_animating,
            ),
            dcc.Interval(id=ENTRANCE_CLOCK_ID, interval=MIN_TICK_MS, n_intervals=0, max_intervals=1),
        ],
    )


def error_layout(title: str, message: str) -> html.Div:
    """Shown instead of the charts when the dataset could not be loaded."""
    return html.Div(
        className="app-root",
        children=[
            html.Header(className="app-header", children=[html.H1(title)]),
            html.Div(
                className="panel load-error",
                children=[
                    html.H2("Dataset unavailable"),
                    html.P(message),
                ],
            ),
        ],
    )
