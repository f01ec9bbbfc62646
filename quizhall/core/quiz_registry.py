"""Registry of live quizzes keyed by join code."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from threading import Lock

from quizhall.core.code_generator import CodeGenerator
from quizhall.core.errors import NotFoundError
from quizhall.core.quiz_session import QuizSession
from quizhall.core.services.question_builder import QuestionInput, build_questions, clean_title

logger = logging.getLogger(__name__)


class QuizRegistry:
    """Creates quizzes and resolves join codes to their sessions.

    One registry is built at process start and handed to the API layer.
    Quizzes live as long as the registry; there is no deletion.
    """

    def __init__(self, code_generator: CodeGenerator | None = None) -> None:
        self._lock = Lock()
        self._quizzes: dict[str, QuizSession] = {}
        self._codes = code_generator or CodeGenerator()

    def generate_unique_code(self) -> str:
        with self._lock:
            return self._codes.unique_code(self._quizzes)

    def create_quiz(self, title: str, questions: Sequence[QuestionInput]) -> str:
        """Validate the quiz content, register it, and return its join code."""
        cleaned_title = clean_title(title)
        prepared = build_questions(questions)
        with self._lock:
            code = self._codes.unique_code(self._quizzes)
            self._quizzes[code] = QuizSession(
                code=code,
                title=cleaned_title,
                questions=prepared,
                code_generator=self._codes,
            )
        logger.info("Created quiz %s (%r) with %d question(s)", code, cleaned_title, len(prepared))
        return code

    def get_quiz(self, code: str) -> QuizSession:
        normalized = normalize_code(code)
        with self._lock:
            quiz = self._quizzes.get(normalized)
        if quiz is None:
            raise NotFoundError(f"No quiz exists with code {normalized}.")
        return quiz

    def list_codes(self) -> list[str]:
        with self._lock:
            return list(self._quizzes)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        with self._lock:
            return normalize_code(code) in self._quizzes

    def __len__(self) -> int:
        with self._lock:
            return len(self._quizzes)


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()
