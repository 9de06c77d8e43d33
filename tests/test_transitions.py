"""
Tests for staged Sankey transitions.
"""

import pytest

from salaryflow.state.transitions import STAGE_SEQUENCE, TransitionStage, TransitionState


def play_to_end(state: TransitionState) -> TransitionState:
    """Acknowledge every remaining stage of the current sequence."""
    while state.is_animating:
        state = state.advance(state.sequence_id)
    return state


class TestTransitionState:
    """Tests for TransitionState."""

    def test_initial_state_is_idle(self) -> None:
        state = TransitionState()
        assert state.stage == TransitionStage.IDLE
        assert state.sequence_id == 0
        assert not state.is_animating

    def test_begin_starts_new_sequence(self) -> None:
        state = TransitionState().begin()
        assert state.stage == TransitionStage.FADE_OUT
        assert state.sequence_id == 1
        assert state.is_animating

    def test_begin_while_animating_raises(self) -> None:
        with pytest.raises(RuntimeError):
            TransitionState().begin().begin()

    def test_stages_play_in_order(self) -> None:
        state = TransitionState().begin()
        seen = [state.stage]
        while state.is_animating:
            state = state.advance(state.sequence_id)
            seen.append(state.stage)
        assert seen == [*STAGE_SEQUENCE, TransitionStage.IDLE]

    def test_gate_stays_closed_until_final_acknowledgement(self) -> None:
        state = TransitionState().begin()
        for _ in range(len(STAGE_SEQUENCE) - 1):
            state = state.advance(state.sequence_id)
            assert state.is_animating
        assert state.stage == TransitionStage.LEGEND
        assert not state.advance(state.sequence_id).is_animating

    def test_stale_acknowledgement_ignored(self) -> None:
        first = play_to_end(TransitionState().begin())
        second = first.begin()

        after_stale = second.advance(first.sequence_id)

        assert after_stale == second
        assert after_stale.stage == TransitionStage.FADE_OUT

    def test_advance_when_idle_is_noop(self) -> None:
        state = TransitionState()
        assert state.advance(0) == state

    def test_finish_keeps_sequence_id(self) -> None:
        state = TransitionState().begin().finish()
        assert state.stage == TransitionStage.IDLE
        assert state.sequence_id == 1

    def test_sequence_ids_increase(self) -> None:
        state = play_to_end(TransitionState().begin())
        assert state.begin().sequence_id == 2

    def test_store_round_trip(self) -> None:
        state = TransitionState().begin().advance(1)
        stored = state.to_store()
        assert stored == {"stage": "nodes", "sequence_id": 1}
        assert TransitionState.from_store(stored) == state
        assert TransitionState.from_store(None) == TransitionState()
