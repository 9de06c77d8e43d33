"""
Interaction coordinator.

Combines the selection and transition snapshots into one DashboardState and
applies user interactions to it. Bar clicks and brush moves are the only
writers of the selection, and both are dropped while a transition is in
flight. An accepted interaction always starts a fresh rebuild sequence.
"""

import logging
from dataclasses import dataclass

from salaryflow.data.schemas import DEFAULT_YEAR_BOUNDS, ExperienceLevel, Selection
from salaryflow.state.selection import reset_selection, toggle_experience_level, year_range_from_brush
from salaryflow.state.transitions import TransitionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    """Selection plus the transition currently playing."""

    selection: Selection
    transition: TransitionState

    @property
    def is_animating(self) -> bool:
        return self.transition.is_animating


def initial_state(bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS) -> DashboardState:
    """Full selection with the entrance sequence already started."""
    return DashboardState(selection=reset_selection(bounds), transition=TransitionState().begin())


def _accept(state: DashboardState, selection: Selection) -> DashboardState:
    return DashboardState(selection=selection, transition=state.transition.begin())


def apply_bar_click(state: DashboardState, level: ExperienceLevel | str) -> DashboardState:
    """Toggle a level from a bar click, unless a transition is running."""
    if state.is_animating:
        logger.debug(f"Dropped bar click on {level} during transition {state.transition.sequence_id}")
        return state
    return _accept(state, toggle_experience_level(state.selection, level))


def apply_brush(
    state: DashboardState,
    x_range: tuple[float, float] | None,
    *,
    bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS,
) -> DashboardState:
    """Set the year range from a brush extent (None clears the brush)."""
    if state.is_animating:
        logger.debug(f"Dropped brush {x_range} during transition {state.transition.sequence_id}")
        return state
    x0, x1 = x_range if x_range is not None else (None, None)
    return _accept(state, year_range_from_brush(state.selection, x0, x1, bounds=bounds))


def acknowledge_stage(state: DashboardState, sequence_id: int) -> DashboardState:
    """The renderer finished showing the current stage of `sequence_id`."""
    return DashboardState(selection=state.selection, transition=state.transition.advance(sequence_id))


def finish_transition(state: DashboardState) -> DashboardState:
    """Stop the current sequence early, e.g. when there is nothing to draw."""
    return DashboardState(selection=state.selection, transition=state.transition.finish())
