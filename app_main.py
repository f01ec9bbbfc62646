"""Application entry point for the QuizHall server."""

from __future__ import annotations

import argparse
from pathlib import Path

from quizhall.constants.about import APP_NAME
from quizhall.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quizhall.core.quiz_importer import load_quiz_from_file
from quizhall.core.quiz_registry import QuizRegistry
from quizhall.server.api_server import run_api_server
from quizhall.utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="quizhall", description=f"Run the {APP_NAME} quiz server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--preload",
        type=Path,
        action="append",
        default=[],
        metavar="FILE",
        help="Quiz text file to register at startup (may be repeated).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, register preloaded quizzes, and serve the API."""
    args = _parse_args(argv)
    logger = configure_logging()
    logger.info("Starting %s…", APP_NAME)

    registry = QuizRegistry()
    for quiz_file in args.preload:
        imported = load_quiz_from_file(quiz_file)
        code = registry.create_quiz(imported.title or quiz_file.stem, imported.questions)
        logger.info("Preloaded %s as quiz %s", quiz_file, code)

    run_api_server(registry=registry, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
