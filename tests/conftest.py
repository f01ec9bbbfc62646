from __future__ import annotations

import random

import pytest

from quizhall.core.code_generator import CodeGenerator
from quizhall.core.quiz_registry import QuizRegistry
from quizhall.core.quiz_session import QuizSession

MATH_QUESTIONS = [
    {"question": "2+2?", "options": ["3", "4", "5"], "correct": [1]},
]

MULTI_QUESTIONS = [
    {"question": "Pick the primes", "options": ["2", "3", "4"], "correct": [0, 1]},
    {"question": "Capital of France?", "options": ["Paris", {"text": "Rome", "image": "/rome.png"}], "correct": 0},
    {"question": "Largest planet?", "questionImage": "/planets.png", "options": ["Mars", "Jupiter"], "correct": [1]},
]


@pytest.fixture
def registry() -> QuizRegistry:
    return QuizRegistry(code_generator=CodeGenerator(rng=random.Random(1234)))


@pytest.fixture
def math_quiz(registry: QuizRegistry) -> QuizSession:
    code = registry.create_quiz("Math", MATH_QUESTIONS)
    return registry.get_quiz(code)


@pytest.fixture
def multi_quiz(registry: QuizRegistry) -> QuizSession:
    code = registry.create_quiz("Mixed", MULTI_QUESTIONS)
    return registry.get_quiz(code)
