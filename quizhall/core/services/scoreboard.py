"""Service for ranking quiz participants."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from quizhall.core.models import Participant


@dataclass(frozen=True, slots=True)
class ScoreboardRow:
    """Immutable snapshot returned to consumers."""

    participant_id: str
    name: str
    score: int
    answered: int
    total: int
    ip: str


def build_scoreboard(participants: Iterable[Participant], total_questions: int) -> list[ScoreboardRow]:
    """Return rows sorted by score, highest first.

    ``sorted`` is stable, so participants with equal scores keep the order in
    which they were supplied (join order for a quiz session).
    """
    ranked = sorted(participants, key=lambda p: -p.score)
    return [
        ScoreboardRow(
            participant_id=participant.participant_id,
            name=participant.name,
            score=participant.score,
            answered=len(participant.answers),
            total=total_questions,
            ip=participant.ip,
        )
        for participant in ranked
    ]
