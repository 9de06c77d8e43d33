"""
Interaction state: the selection snapshot, the staged Sankey transition
and the coordinator that combines them.
"""

from salaryflow.state.coordinator import (
    DashboardState,
    acknowledge_stage,
    apply_bar_click,
    apply_brush,
    finish_transition,
    initial_state,
)
from salaryflow.state.selection import (
    reset_selection,
    set_year_range,
    toggle_experience_level,
    year_range_from_brush,
)
from salaryflow.state.transitions import STAGE_SEQUENCE, TransitionStage, TransitionState

__all__ = [
    # Coordinator
    "DashboardState",
    "acknowledge_stage",
    "apply_bar_click",
    "apply_brush",
    "finish_transition",
    "initial_state",
    # Selection
    "reset_selection",
    "set_year_range",
    "toggle_experience_level",
    "year_range_from_brush",
    # Transitions
    "STAGE_SEQUENCE",
    "TransitionStage",
    "TransitionState",
]
