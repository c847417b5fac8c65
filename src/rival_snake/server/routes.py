"""REST API route handlers for session lifecycle and leaderboards."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from rival_snake.config import GameMode
from rival_snake.records import LEADERBOARD_LIMIT, Identity, LeaderboardQuery
from rival_snake.server.models import (
    CreateSessionRequest,
    LeaderboardEntry,
    SessionSummary,
)
from rival_snake.server.session_manager import SessionManager

router = APIRouter()


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("/sessions", status_code=201, tags=["sessions"])
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new idle session."""
    identity = None
    if body.player_id and body.player_name:
        identity = Identity(id=body.player_id, name=body.player_name)
    try:
        instance = _get_manager(request).create_session(
            grid_size=body.grid_size,
            has_opponent=body.has_opponent,
            revive_enabled=body.revive_enabled,
            tick_rate_ms=body.tick_rate_ms,
            identity=identity,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return instance.summary()


@router.get("/sessions", tags=["sessions"])
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List idle and running sessions."""
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}", tags=["sessions"])
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    instance = _get_manager(request).get_session(session_id)
    if instance is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = instance.summary().model_dump(mode="json")
    result["state"] = instance.session.state.to_dict()
    return result


@router.post("/sessions/{session_id}/start", tags=["sessions"])
async def start_session(session_id: str, request: Request) -> SessionSummary:
    """Start ticking an idle session."""
    try:
        instance = _get_manager(request).start_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return instance.summary()


@router.post("/sessions/{session_id}/restart", tags=["sessions"])
async def restart_session(session_id: str, request: Request) -> SessionSummary:
    """Stop a session and reset it to a fresh idle board."""
    try:
        instance = await _get_manager(request).restart_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return instance.summary()


@router.get("/leaderboard", tags=["leaderboard"])
async def leaderboard(
    request: Request,
    mode: GameMode = GameMode.SOLO,
    grid_size: int | None = Query(default=None, ge=2),
    limit: int = Query(default=LEADERBOARD_LIMIT, ge=1, le=100),
) -> list[LeaderboardEntry]:
    """Top scores for a mode, best first."""
    query = LeaderboardQuery(mode=mode, grid_size=grid_size, limit=limit)
    records = await _get_manager(request).leaderboard(query)
    return [
        LeaderboardEntry(
            rank=i,
            score=r.score,
            opponent_score=r.opponent_score,
            player_name=r.player_name,
            date=r.date.isoformat(),
        )
        for i, r in enumerate(records, start=1)
    ]
