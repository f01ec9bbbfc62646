"""Network configuration constants for the quiz platform."""

import os

DEFAULT_HOST: str = os.environ.get("QUIZHALL_HOST", "0.0.0.0")
DEFAULT_PORT: int = int(os.environ.get("PORT", "8000"))
FORWARDED_FOR_HEADER: str = "x-forwarded-for"
