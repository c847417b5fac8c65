"""In-memory session registry wiring game sessions to connected clients."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from rival_snake.config import GameConfig
from rival_snake.engine import GameState
from rival_snake.records import (
    Identity,
    LeaderboardQuery,
    RecordSink,
    ScoreRecord,
    fetch_leaderboard,
)
from rival_snake.scheduler import GameSession, SessionStatus
from rival_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class SessionInstance:
    """A registered session and the sockets watching it."""

    session_id: str
    session: GameSession
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None

    def summary(self) -> SessionSummary:
        state = self.session.state
        config = self.session.config
        return SessionSummary(
            session_id=self.session_id,
            status=self.session.status,
            mode=config.mode,
            grid_size=config.grid_size,
            tick_rate_ms=config.tick_rate_ms,
            score=state.score,
            ai_score=state.ai_score,
        )


def encode_state(state: GameState) -> str:
    return json.dumps(state.to_dict(), separators=(",", ":"))


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self,
        sink: RecordSink,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self.sink = sink
        self._sessions: dict[str, SessionInstance] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self,
        grid_size: int = 15,
        has_opponent: bool = True,
        revive_enabled: bool = False,
        tick_rate_ms: int = 200,
        identity: Identity | None = None,
    ) -> SessionInstance:
        """Register a new idle session and return it."""
        config = GameConfig(
            grid_size=grid_size,
            has_opponent=has_opponent,
            revive_enabled=revive_enabled,
            tick_rate_ms=tick_rate_ms,
        )
        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id,
            session=GameSession(config, sink=self.sink, identity=identity),
        )
        instance.session.add_listener(
            lambda state: self._on_tick(instance, state),
        )
        self._sessions[session_id] = instance
        logger.info(
            "Session %s created (mode=%s, grid=%d).",
            session_id, config.mode.value, grid_size,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        return instance

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that are not over."""
        return [
            s.summary() for s in self._sessions.values()
            if s.session.status != SessionStatus.GAME_OVER
        ]

    def start_session(self, session_id: str) -> SessionInstance:
        instance = self._require(session_id)
        instance.session.start()
        return instance

    async def restart_session(self, session_id: str) -> SessionInstance:
        instance = self._require(session_id)
        state = await instance.session.restart()
        instance.finished_at = None
        await self._broadcast(instance, encode_state(state))
        return instance

    async def leaderboard(self, query: LeaderboardQuery) -> list[ScoreRecord]:
        return await fetch_leaderboard(self.sink, query)

    async def _on_tick(self, instance: SessionInstance, state: GameState) -> None:
        await self._broadcast(instance, encode_state(state))
        if state.is_game_over and instance.finished_at is None:
            instance.finished_at = time.monotonic()
            self._prune_finished_sessions()

    async def _broadcast(self, instance: SessionInstance, payload: str) -> None:
        """Send a snapshot to every connected socket, dropping dead ones."""
        dead: list[WebSocket] = []
        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(instance.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in instance.sockets:
                instance.sockets.remove(ws)

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._sessions.values() if s.finished_at is not None
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return
        finished.sort(key=lambda s: s.finished_at)
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow, self._max_finished_sessions,
        )

    async def cleanup(self) -> None:
        """Stop every session and flush pending record saves."""
        for instance in self._sessions.values():
            await instance.session.close()
        logger.info("SessionManager cleanup complete.")
