"""Generation of short join codes and participant identifiers."""

from __future__ import annotations

from collections.abc import Container
import random
from threading import Lock

from quizhall.constants.quiz_constants import CODE_ALPHABET, CODE_LENGTH, MAX_CODE_ATTEMPTS


class CodeGenerator:
    """Produces random codes over ``[A-Z0-9]`` that avoid a set of taken values."""

    def __init__(
        self,
        rng: random.Random | None = None,
        alphabet: str = CODE_ALPHABET,
        length: int = CODE_LENGTH,
    ) -> None:
        if not alphabet:
            raise ValueError("Code alphabet cannot be empty.")
        if length <= 0:
            raise ValueError("Code length must be a positive integer.")
        self._rng = rng or random.SystemRandom()
        self._alphabet = alphabet
        self._length = length
        self._lock = Lock()

    def next_code(self) -> str:
        with self._lock:
            return "".join(self._rng.choice(self._alphabet) for _ in range(self._length))

    def unique_code(self, taken: Container[str], max_attempts: int = MAX_CODE_ATTEMPTS) -> str:
        """Return a code not present in ``taken``, regenerating on collision."""
        for _ in range(max_attempts):
            code = self.next_code()
            if code not in taken:
                return code
        raise RuntimeError(f"Could not find a free code after {max_attempts} attempts.")
