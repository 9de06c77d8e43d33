"""
Staged Sankey transitions and the interaction gate built on them.

A rebuild of the flow diagram plays as a fixed sequence of stages: the old
diagram fades out, then nodes, labels, links and legend appear in turn. Each
stage ends only when the renderer acknowledges it with the sequence id it was
started under, and the gate reopens only after the last stage is
acknowledged. Acknowledgements carrying an old sequence id are ignored.
"""

import logging
from enum import Enum

from pydantic import Field

from salaryflow.data.schemas import BaseSchema

logger = logging.getLogger(__name__)


class TransitionStage(str, Enum):
    """Where the flow diagram is in its rebuild animation."""

    IDLE = "idle"
    FADE_OUT = "fade_out"
    NODES = "nodes"
    LABELS = "labels"
    LINKS = "links"
    LEGEND = "legend"


STAGE_SEQUENCE: tuple[TransitionStage, ...] = (
    TransitionStage.FADE_OUT,
    TransitionStage.NODES,
    TransitionStage.LABELS,
    TransitionStage.LINKS,
    TransitionStage.LEGEND,
)


class TransitionState(BaseSchema):
    """Snapshot of the current transition."""

    stage: TransitionStage = TransitionStage.IDLE
    sequence_id: int = Field(ge=0, default=0)

    @property
    def is_animating(self) -> bool:
        return self.stage != TransitionStage.IDLE

    def begin(self) -> "TransitionState":
        """Start a new sequence at its first stage.

        Callers check `is_animating` first; beginning over a running sequence
        is a programming error since sequences are never cancelled.
        """
        if self.is_animating:
            raise RuntimeError(
                f"Transition {self.sequence_id} still running at stage {self.stage.value}"
            )
        return TransitionState(stage=STAGE_SEQUENCE[0], sequence_id=self.sequence_id + 1)

    def advance(self, sequence_id: int) -> "TransitionState":
        """Acknowledge the current stage and move to the next one.

        The stage after the last one is IDLE, which reopens the gate.
        """
        if not self.is_animating:
            return self
        if sequence_id != self.sequence_id:
            logger.debug(
                f"Ignoring stale acknowledgement for transition {sequence_id} "
                f"(current {self.sequence_id})"
            )
            return self

        position = STAGE_SEQUENCE.index(self.stage)
        if position + 1 < len(STAGE_SEQUENCE):
            next_stage = STAGE_SEQUENCE[position + 1]
        else:
            next_stage = TransitionStage.IDLE
            logger.debug(f"Transition {self.sequence_id} complete")
        return TransitionState(stage=next_stage, sequence_id=self.sequence_id)

    def finish(self) -> "TransitionState":
        """End the sequence without playing the remaining stages."""
        return TransitionState(stage=TransitionStage.IDLE, sequence_id=self.sequence_id)

    def to_store(self) -> dict[str, object]:
        return {"stage": self.stage.value, "sequence_id": self.sequence_id}

    @classmethod
    def from_store(cls, data: dict[str, object] | None) -> "TransitionState":
        if not data:
            return cls()
        return cls.model_validate(data)
