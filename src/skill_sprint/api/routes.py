"""REST API routes driving the sprint session."""

import functools
import inspect
import uuid

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from skill_sprint.completion.client import CompletionClient
from skill_sprint.config import get_settings
from skill_sprint.errors import (
    CompletionError,
    InvalidTransitionError,
    ProjectLockedError,
    ProjectNotFoundError,
    RequestInFlightError,
    SprintError,
)
from skill_sprint.models.profile import CareerIntent
from skill_sprint.sprint.randomness import RandomSource
from skill_sprint.sprint.session import SessionStore, SprintSession
from skill_sprint.sprint.views import render

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

_render_random = RandomSource()


class ProfileRequest(BaseModel):
    name: str = ""
    intent: CareerIntent | None = None
    resume_text: str = ""


class SubmissionRequest(BaseModel):
    text: str


@functools.lru_cache
def get_store() -> SessionStore:
    """Process-wide session store built from settings."""
    settings = get_settings()
    client = CompletionClient(
        api_key=settings.openai_api_key,
        model=settings.completion_model,
        temperature=settings.completion_temperature,
    )
    return SessionStore(
        lambda: SprintSession(
            client,
            spin_delay_seconds=settings.spin_delay_seconds,
            rival_name=settings.rival_name,
        ),
        ttl_seconds=settings.session_ttl_seconds,
    )


def validate_session_id(session_id: str) -> str:
    try:
        uuid.UUID(session_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid session ID format")
    return session_id


def get_session(
    session_id: str, store: SessionStore = Depends(get_store)
) -> SprintSession:
    session_id = validate_session_id(session_id)
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def snapshot(session: SprintSession) -> dict:
    state = session.state
    return {
        "session_id": session.session_id,
        "state": state.model_dump(mode="json"),
        "view": render(state, _render_random),
    }


def to_http_error(error: SprintError) -> HTTPException:
    if isinstance(error, CompletionError):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, ProjectNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (InvalidTransitionError, RequestInFlightError, ProjectLockedError)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


async def _run(session: SprintSession, action) -> dict:
    try:
        result = action()
        if inspect.isawaitable(result):
            await result
    except SprintError as e:
        logger.info("action_rejected", session_id=session.session_id, error=type(e).__name__)
        raise to_http_error(e) from e
    return snapshot(session)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/sessions", status_code=201)
async def create_session(store: SessionStore = Depends(get_store)) -> dict:
    """Start a new session at onboarding."""
    return snapshot(store.create())


@router.get("/sessions/{session_id}")
async def read_session(session: SprintSession = Depends(get_session)) -> dict:
    """Current state plus the projection for its view."""
    return snapshot(session)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(
    session_id: str, store: SessionStore = Depends(get_store)
) -> None:
    """Forget a session and its state."""
    session_id = validate_session_id(session_id)
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    logger.info("session_deleted", session_id=session_id)


@router.post("/sessions/{session_id}/profile")
async def submit_profile(
    body: ProfileRequest, session: SprintSession = Depends(get_session)
) -> dict:
    return await _run(
        session,
        lambda: session.submit_profile(body.resume_text, intent=body.intent, name=body.name),
    )


@router.post("/sessions/{session_id}/recommendations")
async def load_recommendations(session: SprintSession = Depends(get_session)) -> dict:
    return await _run(session, session.load_recommendations)


@router.post("/sessions/{session_id}/spin")
async def spin(session: SprintSession = Depends(get_session)) -> dict:
    return await _run(session, session.spin)


@router.post("/sessions/{session_id}/accept")
async def accept_skill(session: SprintSession = Depends(get_session)) -> dict:
    return await _run(session, session.accept_skill)


@router.post("/sessions/{session_id}/projects/{project_id}/open")
async def open_project(
    project_id: int, session: SprintSession = Depends(get_session)
) -> dict:
    return await _run(session, lambda: session.open_project(project_id))


@router.post("/sessions/{session_id}/projects/{project_id}/close")
async def close_project(
    project_id: int, session: SprintSession = Depends(get_session)
) -> dict:
    return await _run(session, session.close_project)


@router.post("/sessions/{session_id}/projects/{project_id}/submission")
async def submit_deliverable(
    project_id: int,
    body: SubmissionRequest,
    session: SprintSession = Depends(get_session),
) -> dict:
    return await _run(session, lambda: session.submit_deliverable(project_id, body.text))


@router.post("/sessions/{session_id}/claim")
async def claim_badge(session: SprintSession = Depends(get_session)) -> dict:
    return await _run(session, session.claim_badge)


@router.post("/sessions/{session_id}/restart")
async def restart(session: SprintSession = Depends(get_session)) -> dict:
    return await _run(session, session.restart)
