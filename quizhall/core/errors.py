"""Error types raised by the quiz core."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for recoverable quiz errors."""

    kind = "quiz_error"


class ValidationError(QuizError):
    """Raised when required input is missing or malformed."""

    kind = "validation_error"


class NotFoundError(QuizError):
    """Raised for unknown quiz codes, unknown participants or finished participants."""

    kind = "not_found"


class AccessDeniedError(QuizError):
    """Raised when the requester's address is blacklisted."""

    kind = "access_denied"


class AccessRestrictedError(QuizError):
    """Raised when a non-empty whitelist does not include the requester's address."""

    kind = "access_restricted"
