"""Utilities for importing quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    TITLE: Quiz title (optional, first block only)
    Q: Question text (supports markdown). Additional lines until the next
       marker are treated as part of the question.
    IMAGE: optional image url for the question
    A: First option text
    IMAGE: optional image url for the option above
    B: Second option text
    ... up to P (Q: starts a question)
    CORRECT: A, C   (one or more letters)

Example:

    TITLE: Arithmetic
    Q: What is $2 + 2$?
    A: 3
    B: 4
    C: 5
    CORRECT: B

Blocks are parsed into the same authoring mappings accepted by
``QuizRegistry.create_quiz``, so validation of indices and option counts
happens in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
import string
from typing import Any

from quizhall.core.errors import ValidationError


class QuizImportError(ValidationError):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    title: str | None
    questions: list[dict[str, Any]] = field(default_factory=list)
    source_path: Path | None = None


_OPTION_LETTERS = string.ascii_uppercase[:16]
_CORRECT_SPLIT = re.compile(r"[\s,;]+")


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    imported = parse_quiz_text(text)
    imported.source_path = file_path
    return imported


def parse_quiz_text(text: str) -> ImportedQuiz:
    title: str | None = None
    questions: list[dict[str, Any]] = []
    for position, block in enumerate(_split_blocks(text)):
        lines = block.splitlines()
        if position == 0 and lines and lines[0].strip().upper().startswith("TITLE:"):
            title = lines[0].split(":", 1)[1].strip() or None
            lines = lines[1:]
            if not any(line.strip() for line in lines):
                continue
        questions.append(_parse_block(lines))
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(title=title, questions=questions)


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_block(lines: list[str]) -> dict[str, Any]:
    question_lines: list[str] = []
    question_image: str | None = None
    options: dict[str, dict[str, str]] = {}
    correct_letters: list[str] | None = None
    current_section: str | None = None

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            raw_value = line.split(":", 1)[1].strip().upper()
            correct_letters = [letter for letter in _CORRECT_SPLIT.split(raw_value) if letter]
            current_section = None
            continue

        if upper.startswith("IMAGE:"):
            image_url = line.split(":", 1)[1].strip()
            if current_section == "Q":
                question_image = image_url
            elif current_section in options:
                options[current_section]["image"] = image_url
            else:
                raise QuizImportError("IMAGE must follow a question or an option line.")
            continue

        if len(line) >= 2 and line[0].upper() in _OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = {"text": line[2:].strip()}
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in options:
            options[current_section]["text"] += f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    if not question_lines:
        raise QuizImportError("Question text missing (Q: ...)")
    if not options:
        raise QuizImportError("Each question must define at least one option (A: ...).")

    letters = sorted(options)
    expected = list(_OPTION_LETTERS[: len(letters)])
    if letters != expected:
        raise QuizImportError(f"Options must be lettered consecutively from A (found {', '.join(letters)}).")
    if any(not options[letter]["text"].strip() for letter in letters):
        raise QuizImportError("Option text cannot be empty.")

    if not correct_letters:
        raise QuizImportError("CORRECT must name at least one option letter.")
    unknown = [letter for letter in correct_letters if letter not in options]
    if unknown:
        raise QuizImportError(f"CORRECT refers to undefined option(s): {', '.join(unknown)}.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text cannot be empty.")

    return {
        "question": question_text,
        "questionImage": question_image,
        "options": [options[letter] for letter in letters],
        "correct": sorted({letters.index(letter) for letter in correct_letters}),
    }
