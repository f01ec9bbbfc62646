"""Validation and normalization of authored quiz content."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from quizhall.core.errors import ValidationError
from quizhall.core.grading import parse_index
from quizhall.core.models import ImageOption, Option, Question, TextOption

QuestionInput = Question | Mapping[str, Any]


def clean_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Please provide a quiz title.")
    return cleaned


def build_questions(questions: Sequence[QuestionInput] | None) -> tuple[Question, ...]:
    """Validate every question of a quiz; the quiz needs at least one."""
    if not questions or isinstance(questions, (str, bytes, Mapping)):
        raise ValidationError("Please provide at least one question.")
    prepared = []
    for position, question in enumerate(questions, start=1):
        try:
            prepared.append(build_question(question))
        except ValidationError as exc:
            raise ValidationError(f"Question {position}: {exc}") from exc
    return tuple(prepared)


def build_question(question: QuestionInput) -> Question:
    """Validate a question given either as a model or as an authoring mapping."""
    if isinstance(question, Question):
        return _prepare_question(question.text, question.options, question.correct, question.image_url)
    if not isinstance(question, Mapping):
        raise ValidationError("Question must be an object.")

    text = question.get("question", question.get("text"))
    options = question.get("options")
    correct = question.get("correct")
    image_url = question.get("questionImage", question.get("image"))
    if text is None:
        raise ValidationError("Question text is missing.")
    if options is None:
        raise ValidationError("Question options are missing.")
    if correct is None:
        raise ValidationError("Correct answer is missing.")
    if not isinstance(options, Sequence) or isinstance(options, (str, bytes)):
        raise ValidationError("Question options must be a list.")
    return _prepare_question(
        text,
        [_build_option(option) for option in options],
        _coerce_correct(correct),
        image_url,
    )


def _prepare_question(
    text: object,
    options: Iterable[Option],
    correct: Iterable[int],
    image_url: object,
) -> Question:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Question text must not be empty.")
    option_tuple = tuple(options)
    if not option_tuple:
        raise ValidationError("Each question needs at least one option.")
    correct_set = frozenset(correct)
    if not correct_set:
        raise ValidationError("Each question needs at least one correct option.")
    if any(not 0 <= index < len(option_tuple) for index in correct_set):
        raise ValidationError("Correct option index is out of range.")
    return Question(
        text=text.strip(),
        options=option_tuple,
        correct=correct_set,
        image_url=_clean_image(image_url),
    )


def _build_option(option: object) -> Option:
    if isinstance(option, (TextOption, ImageOption)):
        return option
    if isinstance(option, str):
        return TextOption(text=_clean_option_text(option))
    if isinstance(option, Mapping):
        text = option.get("text")
        if not isinstance(text, str):
            raise ValidationError("Option text is missing.")
        text = _clean_option_text(text)
        image_url = _clean_image(option.get("image", option.get("image_url")))
        if image_url:
            return ImageOption(text=text, image_url=image_url)
        return TextOption(text=text)
    raise ValidationError("Option must be text or an object with a 'text' field.")


def _clean_option_text(text: str) -> str:
    cleaned = text.strip()
    if not cleaned:
        raise ValidationError("Option text cannot be empty.")
    return cleaned


def _coerce_correct(correct: object) -> list[int]:
    values = correct if isinstance(correct, (list, tuple, set, frozenset)) else [correct]
    indices = []
    for value in values:
        index = parse_index(value)
        if index is None:
            raise ValidationError("Correct option index must be an integer.")
        indices.append(index)
    return indices


def _clean_image(image_url: object) -> str | None:
    if isinstance(image_url, str) and image_url.strip():
        return image_url.strip()
    return None
