"""Domain models for the quiz platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TextOption:
    """Answer option consisting of plain text."""

    text: str


@dataclass(frozen=True, slots=True)
class ImageOption:
    """Answer option with text and an accompanying image reference."""

    text: str
    image_url: str


Option = TextOption | ImageOption


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-select question; ``correct`` holds option indices."""

    text: str
    options: tuple[Option, ...]
    correct: frozenset[int]
    image_url: str | None = None

    def option_texts(self, indices: frozenset[int] | set[int]) -> list[str]:
        return [self.options[index].text for index in sorted(indices)]


@dataclass(slots=True)
class Participant:
    """A joined quiz-taker and their progress through the questions."""

    participant_id: str
    name: str
    ip: str
    joined_at: datetime
    answers: list[frozenset[int]] = field(default_factory=list)
    score: int = 0


@dataclass(frozen=True, slots=True)
class OptionView:
    index: int
    text: str
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionView:
    """Snapshot of the next question to present to a participant."""

    quiz_title: str
    position: int
    total: int
    text: str
    html: str
    image_url: str | None
    options: list[OptionView]


@dataclass(frozen=True, slots=True)
class Progress:
    """Participant progress after an answer has been recorded."""

    answered: int
    total: int
    score: int

    @property
    def completed(self) -> bool:
        return self.answered >= self.total


@dataclass(frozen=True, slots=True)
class QuestionOutcome:
    question_text: str
    selected: list[str]
    correct: list[str]
    is_correct: bool


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Result summary for a single participant."""

    quiz_title: str
    participant_name: str
    outcomes: list[QuestionOutcome]
    score: int
    total: int
    percent: int
    points: int


@dataclass(frozen=True, slots=True)
class AccessLists:
    whitelist: list[str]
    blacklist: list[str]
