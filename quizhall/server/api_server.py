"""FastAPI server that exposes the quiz operations as JSON endpoints."""

from __future__ import annotations

from dataclasses import asdict
import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
import uvicorn

from quizhall.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from quizhall.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT, FORWARDED_FOR_HEADER
from quizhall.core.errors import (
    AccessDeniedError,
    AccessRestrictedError,
    NotFoundError,
    QuizError,
    ValidationError,
)
from quizhall.core.models import AccessLists
from quizhall.core.quiz_importer import parse_quiz_text
from quizhall.core.quiz_registry import QuizRegistry
from quizhall.core.quiz_session import QuizSession

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[QuizError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    AccessDeniedError: 403,
    AccessRestrictedError: 403,
}


class CreateQuizPayload(BaseModel):
    """Payload schema for authoring a quiz."""

    title: str = ""
    questions: list[Any] = Field(default_factory=list)


class ImportQuizPayload(BaseModel):
    """Payload schema for authoring a quiz from the plain-text format."""

    source: str
    title: str | None = None


class JoinPayload(BaseModel):
    name: str = ""


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers; entries that are not option indices are ignored."""

    selected: Any = None


class IpPayload(BaseModel):
    ip: str = ""


def requester_ip(request: Request) -> str:
    """Client address, preferring the first hop recorded by a forwarding proxy."""
    forwarded = request.headers.get(FORWARDED_FOR_HEADER)
    if forwarded:
        first_hop = forwarded.split(",", 1)[0].strip()
        if first_hop:
            return first_hop
    if request.client is not None and request.client.host:
        return request.client.host
    return ""


def _get_registry_dependency(registry: QuizRegistry):
    def dependency() -> QuizRegistry:
        return registry

    return dependency


def _quiz_summary(quiz: QuizSession) -> dict[str, object]:
    return {
        "code": quiz.code,
        "title": quiz.title,
        "question_count": quiz.get_question_count(),
        "participant_count": quiz.get_participant_count(),
        "created_at": quiz.created_at.isoformat(),
    }


def _lists_payload(lists: AccessLists) -> dict[str, list[str]]:
    return {"whitelist": lists.whitelist, "blacklist": lists.blacklist}


def create_api_app(registry: QuizRegistry) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz registry."""
    app = FastAPI(title=f"{APP_NAME} API", description=APP_ABOUT_TEXT, version=APP_VERSION)
    registry_dep = _get_registry_dependency(registry)

    @app.exception_handler(QuizError)
    def handle_quiz_error(request: Request, exc: QuizError) -> JSONResponse:
        status_code = next(
            (status for error_type, status in _STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
            400,
        )
        return JSONResponse(status_code=status_code, content={"error": exc.kind, "detail": str(exc)})

    @app.post("/quizzes", status_code=201)
    def create_quiz(
        payload: CreateQuizPayload,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        code = quizzes.create_quiz(payload.title, payload.questions)
        return _quiz_summary(quizzes.get_quiz(code))

    @app.post("/quizzes/import", status_code=201)
    def import_quiz(
        payload: ImportQuizPayload,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        imported = parse_quiz_text(payload.source)
        title = payload.title if payload.title and payload.title.strip() else imported.title
        code = quizzes.create_quiz(title or "", imported.questions)
        return _quiz_summary(quizzes.get_quiz(code))

    @app.get("/quizzes/{code}")
    def get_quiz(code: str, quizzes: QuizRegistry = Depends(registry_dep)) -> dict[str, object]:
        return _quiz_summary(quizzes.get_quiz(code))

    @app.post("/quizzes/{code}/join", status_code=201)
    def join_quiz(
        code: str,
        payload: JoinPayload,
        request: Request,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        quiz = quizzes.get_quiz(code)
        participant_id = quiz.join(payload.name, requester_ip(request))
        participant = quiz.get_participant(participant_id)
        return {
            "code": quiz.code,
            "participant_id": participant_id,
            "name": participant.name,
            "joined_at": participant.joined_at.isoformat(),
        }

    @app.get("/quizzes/{code}/participants/{participant_id}/question")
    def get_question(
        code: str,
        participant_id: str,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        quiz = quizzes.get_quiz(code)
        view = quiz.current_question(participant_id)
        if view is None:
            return {"completed": True, "question": None}
        return {"completed": False, "question": asdict(view)}

    @app.post("/quizzes/{code}/participants/{participant_id}/answer")
    def submit_answer(
        code: str,
        participant_id: str,
        payload: AnswerPayload,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        quiz = quizzes.get_quiz(code)
        progress = quiz.submit_answer(participant_id, payload.selected)
        return {
            "answered": progress.answered,
            "total": progress.total,
            "score": progress.score,
            "completed": progress.completed,
        }

    @app.get("/quizzes/{code}/participants/{participant_id}/result")
    def get_result(
        code: str,
        participant_id: str,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, object]:
        quiz = quizzes.get_quiz(code)
        return asdict(quiz.compute_result(participant_id))

    @app.get("/quizzes/{code}/scoreboard")
    def get_scoreboard(code: str, quizzes: QuizRegistry = Depends(registry_dep)) -> dict[str, object]:
        quiz = quizzes.get_quiz(code)
        return {
            "code": quiz.code,
            "title": quiz.title,
            "rows": [asdict(row) for row in quiz.compute_scoreboard()],
            **_lists_payload(quiz.access_lists()),
        }

    @app.post("/quizzes/{code}/whitelist")
    def whitelist_ip(
        code: str,
        payload: IpPayload,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, list[str]]:
        return _lists_payload(quizzes.get_quiz(code).add_to_whitelist(payload.ip))

    @app.post("/quizzes/{code}/blacklist")
    def blacklist_ip(
        code: str,
        payload: IpPayload,
        quizzes: QuizRegistry = Depends(registry_dep),
    ) -> dict[str, list[str]]:
        return _lists_payload(quizzes.get_quiz(code).add_to_blacklist(payload.ip))

    return app


def run_api_server(
    registry: QuizRegistry,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API with uvicorn until the process is interrupted."""
    app = create_api_app(registry)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    logger.info("Serving %s API on http://%s:%d/", APP_NAME, host, port)
    server.run()
