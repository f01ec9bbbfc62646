"""State of a single quiz: participants, their answers, and access control."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
import logging
from threading import Lock

from quizhall.core.code_generator import CodeGenerator
from quizhall.core.errors import (
    AccessDeniedError,
    AccessRestrictedError,
    NotFoundError,
    ValidationError,
)
from quizhall.core.grading import normalize_selection, percent_of, points_for, selections_match
from quizhall.core.markdown_math_renderer import renderer
from quizhall.core.models import (
    AccessLists,
    ImageOption,
    OptionView,
    Participant,
    Progress,
    Question,
    QuestionOutcome,
    QuestionView,
    QuizResult,
)
from quizhall.core.services.access_control import AccessControlList
from quizhall.core.services.scoreboard import ScoreboardRow, build_scoreboard

logger = logging.getLogger(__name__)


class QuizSession:
    """Owns one quiz's questions, participants and IP lists.

    Every public method takes the session lock, so concurrent requests for
    the same quiz are serialized.
    """

    def __init__(
        self,
        code: str,
        title: str,
        questions: Sequence[Question],
        code_generator: CodeGenerator | None = None,
    ) -> None:
        if not questions:
            raise ValidationError("Please provide at least one question.")
        self._lock = Lock()
        self._code = code
        self._title = title
        self._questions: tuple[Question, ...] = tuple(questions)
        self._created_at = datetime.now(timezone.utc)
        self._participants: dict[str, Participant] = {}
        self._access = AccessControlList()
        self._ids = code_generator or CodeGenerator()

    @property
    def code(self) -> str:
        return self._code

    @property
    def title(self) -> str:
        return self._title

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_participant_count(self) -> int:
        with self._lock:
            return len(self._participants)

    def get_participant(self, participant_id: str) -> Participant:
        with self._lock:
            return self._require_participant(participant_id)

    # --- Admission & access control ---

    def join(self, name: str, requester_ip: str) -> str:
        """Admit a participant and return their id."""
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise ValidationError("Please provide your name.")
        ip = (requester_ip or "").strip()
        with self._lock:
            try:
                self._access.check(ip)
            except (AccessDeniedError, AccessRestrictedError) as exc:
                logger.warning("Quiz %s refused %r from %s: %s", self._code, cleaned_name, ip, exc.kind)
                raise
            participant_id = self._ids.unique_code(self._participants)
            self._participants[participant_id] = Participant(
                participant_id=participant_id,
                name=cleaned_name,
                ip=ip,
                joined_at=datetime.now(timezone.utc),
            )
        logger.info("Participant %s (%s) joined quiz %s", participant_id, cleaned_name, self._code)
        return participant_id

    def check_access(self, requester_ip: str) -> None:
        with self._lock:
            self._access.check(requester_ip)

    def add_to_whitelist(self, ip: str) -> AccessLists:
        with self._lock:
            self._access.allow(ip)
            return self._access.snapshot()

    def add_to_blacklist(self, ip: str) -> AccessLists:
        with self._lock:
            self._access.deny(ip)
            return self._access.snapshot()

    def access_lists(self) -> AccessLists:
        with self._lock:
            return self._access.snapshot()

    # --- Answering & scoring ---

    def current_question_index(self, participant_id: str) -> int:
        with self._lock:
            return len(self._require_participant(participant_id).answers)

    def is_completed(self, participant_id: str) -> bool:
        return self.current_question_index(participant_id) >= len(self._questions)

    def current_question(self, participant_id: str) -> QuestionView | None:
        """Return the next question for the participant, or None once completed."""
        with self._lock:
            index = len(self._require_participant(participant_id).answers)
        if index >= len(self._questions):
            return None
        question = self._questions[index]
        return QuestionView(
            quiz_title=self._title,
            position=index + 1,
            total=len(self._questions),
            text=question.text,
            html=renderer.render_fragment(question.text),
            image_url=question.image_url,
            options=[
                OptionView(
                    index=option_index,
                    text=option.text,
                    image_url=option.image_url if isinstance(option, ImageOption) else None,
                )
                for option_index, option in enumerate(question.options)
            ],
        )

    def submit_answer(self, participant_id: str, selected: object) -> Progress:
        """Record the participant's answer to their current question."""
        with self._lock:
            participant = self._require_participant(participant_id)
            index = len(participant.answers)
            if index >= len(self._questions):
                raise NotFoundError("No more questions remain for this participant.")
            question = self._questions[index]
            selection = normalize_selection(selected, len(question.options))
            participant.answers.append(selection)
            if selections_match(selection, question.correct):
                participant.score += 1
            return Progress(
                answered=len(participant.answers),
                total=len(self._questions),
                score=participant.score,
            )

    def compute_result(self, participant_id: str) -> QuizResult:
        with self._lock:
            participant = self._require_participant(participant_id)
            answers = list(participant.answers)
            score = participant.score
            name = participant.name

        outcomes = []
        for index, question in enumerate(self._questions):
            selection = answers[index] if index < len(answers) else frozenset()
            outcomes.append(
                QuestionOutcome(
                    question_text=question.text,
                    selected=question.option_texts(selection),
                    correct=question.option_texts(question.correct),
                    is_correct=index < len(answers) and selections_match(selection, question.correct),
                )
            )
        total = len(self._questions)
        return QuizResult(
            quiz_title=self._title,
            participant_name=name,
            outcomes=outcomes,
            score=score,
            total=total,
            percent=percent_of(score, total),
            points=points_for(score),
        )

    def compute_scoreboard(self) -> list[ScoreboardRow]:
        with self._lock:
            return build_scoreboard(self._participants.values(), len(self._questions))

    def _require_participant(self, participant_id: str) -> Participant:
        participant = self._participants.get(participant_id)
        if participant is None:
            raise NotFoundError("Invalid quiz or participant.")
        return participant
