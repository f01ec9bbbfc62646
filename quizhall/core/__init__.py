"""In-memory quiz core: registry, sessions, scoring and access control."""

from .errors import (
    AccessDeniedError,
    AccessRestrictedError,
    NotFoundError,
    QuizError,
    ValidationError,
)
from .quiz_registry import QuizRegistry
from .quiz_session import QuizSession

__all__ = [
    "AccessDeniedError",
    "AccessRestrictedError",
    "NotFoundError",
    "QuizError",
    "QuizRegistry",
    "QuizSession",
    "ValidationError",
]
