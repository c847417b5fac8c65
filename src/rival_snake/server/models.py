"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rival_snake.config import GameMode
from rival_snake.scheduler import SessionStatus


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int = Field(default=15, ge=2, le=50)
    has_opponent: bool = True
    revive_enabled: bool = False
    tick_rate_ms: int = Field(default=200, ge=50, le=2000)
    player_id: str | None = Field(default=None, min_length=1, max_length=64)
    player_name: str | None = Field(default=None, min_length=1, max_length=32)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    mode: GameMode
    grid_size: int
    tick_rate_ms: int
    score: int
    ai_score: int


class LeaderboardEntry(BaseModel):
    """One row of a leaderboard response."""

    rank: int
    score: int
    opponent_score: int | None
    player_name: str
    date: str

