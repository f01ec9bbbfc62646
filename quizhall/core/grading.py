"""Answer intake normalization and scoring rules."""

from __future__ import annotations

from collections.abc import Iterable
import math

from quizhall.constants.quiz_constants import POINTS_PER_CORRECT_ANSWER


def normalize_selection(selected: object, option_count: int) -> frozenset[int]:
    """Coerce submitted option indices into a set of valid, in-range integers.

    ``None`` means nothing was selected and a lone value is treated as a
    one-element collection. Entries that do not parse as integers or fall
    outside ``range(option_count)`` are dropped.
    """
    if selected is None:
        return frozenset()
    if isinstance(selected, (str, bytes, int)) or not isinstance(selected, Iterable):
        selected = [selected]

    indices: set[int] = set()
    for raw in selected:
        index = parse_index(raw)
        if index is not None and 0 <= index < option_count:
            indices.add(index)
    return frozenset(indices)


def selections_match(selected: Iterable[int], correct: Iterable[int]) -> bool:
    """Strict unordered set equality: no partial credit for subsets or supersets."""
    return set(selected) == set(correct)


def percent_of(score: int, total: int) -> int:
    if total <= 0:
        return 0
    # Halves round up.
    return math.floor(score * 100 / total + 0.5)


def points_for(score: int) -> int:
    return score * POINTS_PER_CORRECT_ANSWER


def parse_index(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None
