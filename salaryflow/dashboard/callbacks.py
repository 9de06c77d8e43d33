"""
Dash callbacks for the salary dashboard.

Four callbacks cooperate:
- entrance: swaps the zero-height first frames of the bar and line charts
  for the real figures once the page has drawn them
- interaction: bar clicks and brush moves update the selection and start a
  Sankey rebuild, or are dropped while one is running
- render: draws the Sankey diagram for the current transition stage and
  records which stage is on screen. The fade-out stage dims the diagram of
  the previous selection
- advance: on each clock tick, acknowledges the stage on screen and moves
  the transition on; the clock stops once the sequence is complete

The handlers below are plain functions of the store contents so they can be
exercised without a browser.
"""

import logging
from typing import Any

import dash
import plotly.graph_objects as go
from dash import Input, Output, Patch, State
from dash.exceptions import PreventUpdate

from salaryflow.dashboard.layout import (
    BAR_CHART_ID,
    CLOCK_ID,
    ENTRANCE_CLOCK_ID,
    LINE_CHART_ID,
    PREVIOUS_SELECTION_STORE_ID,
    RENDERED_STORE_ID,
    SANKEY_ID,
    SANKEY_STATUS_ID,
    SELECTION_STORE_ID,
    TRANSITION_STORE_ID,
    tick_interval,
)
from salaryflow.data.schemas import ExperienceLevel, NodeKind, Selection
from salaryflow.pipeline import DashboardData
from salaryflow.renderers.figures import bar_figure, bar_hover_text, bar_opacities, line_figure, sankey_figure
from salaryflow.state.coordinator import (
    DashboardState,
    acknowledge_stage,
    apply_bar_click,
    apply_brush,
    finish_transition,
)
from salaryflow.state.transitions import TransitionStage, TransitionState

logger = logging.getLogger(__name__)


# =============================================================================
# EVENT PARSING
# =============================================================================


def level_from_click(click_data: dict[str, Any] | None) -> ExperienceLevel | None:
    """Experience level of the clicked bar, if any."""
    if not click_data or not click_data.get("points"):
        return None
    code = click_data["points"][0].get("customdata")
    if isinstance(code, list):
        code = code[0] if code else None
    try:
        return ExperienceLevel(code)
    except ValueError:
        logger.warning(f"Ignoring click on unknown experience level {code!r}")
        return None


def brush_extent(selected_data: dict[str, Any] | None) -> tuple[float, float] | None:
    """x extent of the line chart brush; None when the brush was cleared."""
    if not selected_data:
        return None
    x_range = (selected_data.get("range") or {}).get("x")
    if not x_range or len(x_range) != 2:
        return None
    return float(x_range[0]), float(x_range[1])


# =============================================================================
# HANDLERS
# =============================================================================


def handle_interaction(
    data: DashboardData,
    triggered_id: str | None,
    click_data: dict[str, Any] | None,
    selected_data: dict[str, Any] | None,
    selection_data: dict[str, Any] | None,
    transition_data: dict[str, Any] | None,
) -> DashboardState | None:
    """Apply a bar click or brush event.

    Returns:
        The new state, or None when the event was dropped or carried nothing
    """
    state = DashboardState(
        selection=Selection.from_store(selection_data),
        transition=TransitionState.from_store(transition_data),
    )

    if triggered_id == BAR_CHART_ID:
        level = level_from_click(click_data)
        if level is None:
            return None
        new_state = apply_bar_click(state, level)
    elif triggered_id == LINE_CHART_ID:
        new_state = apply_brush(state, brush_extent(selected_data), bounds=data.config.year_bounds)
    else:
        return None

    if new_state is state:
        return None
    logger.info(
        f"Selection changed to levels={new_state.selection.to_store()['experience_levels']} "
        f"years={new_state.selection.year_range}"
    )
    return new_state


def handle_tick(
    data: DashboardData,
    selection_data: dict[str, Any] | None,
    transition_data: dict[str, Any] | None,
    rendered_data: dict[str, Any] | None,
) -> TransitionState | None:
    """Acknowledge the stage on screen and move the transition on.

    Returns:
        The next transition state, or None when the current stage has not
        been drawn yet
    """
    state = DashboardState(
        selection=Selection.from_store(selection_data),
        transition=TransitionState.from_store(transition_data),
    )
    if not state.is_animating:
        return state.transition

    current = state.transition
    if not rendered_data or (
        rendered_data.get("sequence_id") != current.sequence_id
        or rendered_data.get("stage") != current.stage.value
    ):
        return None

    new_state = acknowledge_stage(state, rendered_data["sequence_id"])
    if new_state.transition.stage == TransitionStage.NODES and data.flow_graph(state.selection).is_empty:
        # Nothing to lay out: go straight to the placeholder
        new_state = finish_transition(new_state)
    return new_state.transition


def entrance_figures(data: DashboardData, selection_data: dict[str, Any] | None) -> tuple[go.Figure, go.Figure]:
    """Real bar and line figures that replace the entrance frames."""
    selection = Selection.from_store(selection_data)
    duration = data.config.timings.entrance_ms
    return (
        bar_figure(data.bar_spec(selection), transition_ms=duration),
        line_figure(data.line_spec(), transition_ms=duration),
    )


def sankey_status(data: DashboardData, selection: Selection, stage: TransitionStage) -> str:
    if stage != TransitionStage.IDLE:
        return "Updating flow diagram..."
    graph = data.flow_graph(selection)
    if graph.is_empty:
        return "No data matches current selection"
    titles = len(graph.nodes_of_kind(NodeKind.JOB_TITLE))
    return (
        f"{graph.row_count:,} records across the top {titles} job titles, "
        f"{selection.year_range[0]}-{selection.year_range[1]}"
    )


# =============================================================================
# REGISTRATION
# =============================================================================


def register_callbacks(app: dash.Dash, data: DashboardData) -> None:
    """Attach the dashboard callbacks to an app."""
    timings = data.config.timings

    @app.callback(
        Output(BAR_CHART_ID, "figure", allow_duplicate=True),
        Output(LINE_CHART_ID, "figure"),
        Input(ENTRANCE_CLOCK_ID, "n_intervals"),
        State(SELECTION_STORE_ID, "data"),
        prevent_initial_call=True,
    )
    def play_entrance(n_intervals, selection_data):
        return entrance_figures(data, selection_data)

    @app.callback(
        Output(SELECTION_STORE_ID, "data"),
        Output(PREVIOUS_SELECTION_STORE_ID, "data"),
        Output(TRANSITION_STORE_ID, "data", allow_duplicate=True),
        Output(CLOCK_ID, "disabled", allow_duplicate=True),
        Output(CLOCK_ID, "interval", allow_duplicate=True),
        Output(BAR_CHART_ID, "figure"),
        Input(BAR_CHART_ID, "clickData"),
        Input(LINE_CHART_ID, "selectedData"),
        State(SELECTION_STORE_ID, "data"),
        State(TRANSITION_STORE_ID, "data"),
        prevent_initial_call=True,
    )
    def on_interaction(click_data, selected_data, selection_data, transition_data):
        new_state = handle_interaction(
            data,
            dash.ctx.triggered_id,
            click_data,
            selected_data,
            selection_data,
            transition_data,
        )
        if new_state is None:
            raise PreventUpdate

        # Restyle the bars in place; the bar chart itself is never redrawn
        bar_patch = Patch()
        bar_patch["data"][0]["marker"]["opacity"] = bar_opacities(new_state.selection)
        bar_patch["data"][0]["hovertext"] = bar_hover_text(data.bar_spec(new_state.selection))

        return (
            new_state.selection.to_store(),
            selection_data,
            new_state.transition.to_store(),
            False,
            tick_interval(timings.duration_for(new_state.transition.stage)),
            bar_patch,
        )

    @app.callback(
        Output(SANKEY_ID, "figure"),
        Output(SANKEY_STATUS_ID, "children"),
        Output(RENDERED_STORE_ID, "data"),
        Input(TRANSITION_STORE_ID, "data"),
        State(SELECTION_STORE_ID, "data"),
        State(PREVIOUS_SELECTION_STORE_ID, "data"),
    )
    def render_sankey(transition_data, selection_data, previous_data):
        selection = Selection.from_store(selection_data)
        transition = TransitionState.from_store(transition_data)
        previous = Selection.from_store(previous_data) if previous_data else None
        spec = data.sankey_spec(selection, transition.stage, previous=previous)
        return (
            sankey_figure(spec),
            sankey_status(data, selection, transition.stage),
            transition.to_store(),
        )

    @app.callback(
        Output(TRANSITION_STORE_ID, "data"),
        Output(CLOCK_ID, "disabled"),
        Output(CLOCK_ID, "interval"),
        Input(CLOCK_ID, "n_intervals"),
        State(SELECTION_STORE_ID, "data"),
        State(TRANSITION_STORE_ID, "data"),
        State(RENDERED_STORE_ID, "data"),
        prevent_initial_call=True,
    )
    def advance_transition(n_intervals, selection_data, transition_data, rendered_data):
        transition = handle_tick(data, selection_data, transition_data, rendered_data)
        if transition is None:
            raise PreventUpdate
        if not transition.is_animating:
            return transition.to_store(), True, dash.no_update
        return (
            transition.to_store(),
            False,
            tick_interval(timings.duration_for(transition.stage)),
        )
