"""Quiz-related constants shared across the core and API layers."""

import string

CODE_ALPHABET: str = string.ascii_uppercase + string.digits
CODE_LENGTH: int = 6
MAX_CODE_ATTEMPTS: int = 10_000
POINTS_PER_CORRECT_ANSWER: int = 100
