"""Score records and the record-sink capability used by game sessions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from rival_snake.config import GameMode

logger = logging.getLogger(__name__)

LEADERBOARD_LIMIT = 20
ANONYMOUS_ID = "anon"
ANONYMOUS_NAME = "Anonymous"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Identity(BaseModel):
    """A signed-in player. Sessions without one are recorded as anonymous."""

    id: str
    name: str


class ScoreRecord(BaseModel):
    """One finished session as stored in a leaderboard."""

    score: int = Field(ge=0)
    opponent_score: int | None = Field(default=None, ge=0)
    mode: GameMode
    grid_size: int = Field(ge=2)
    player_id: str = ANONYMOUS_ID
    player_name: str = ANONYMOUS_NAME
    date: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_session(
        cls,
        score: int,
        opponent_score: int | None,
        mode: GameMode,
        grid_size: int,
        identity: Identity | None = None,
    ) -> ScoreRecord:
        """Build a record, filling in the anonymous identity if needed."""
        return cls(
            score=score,
            opponent_score=opponent_score,
            mode=mode,
            grid_size=grid_size,
            player_id=identity.id if identity else ANONYMOUS_ID,
            player_name=identity.name if identity else ANONYMOUS_NAME,
        )


class LeaderboardQuery(BaseModel):
    """Filter for :meth:`RecordSink.fetch_top`."""

    mode: GameMode = GameMode.SOLO
    grid_size: int | None = Field(default=None, ge=2)
    limit: int = Field(default=LEADERBOARD_LIMIT, ge=1, le=100)


@runtime_checkable
class RecordSink(Protocol):
    """Persistence capability for finished sessions."""

    async def save(self, record: ScoreRecord) -> None: ...

    async def fetch_top(self, query: LeaderboardQuery) -> list[ScoreRecord]: ...


class InMemoryRecordSink:
    """Process-local record sink, ordered by score on read."""

    def __init__(self) -> None:
        self._records: list[ScoreRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    async def save(self, record: ScoreRecord) -> None:
        self._records.append(record)

    async def fetch_top(self, query: LeaderboardQuery) -> list[ScoreRecord]:
        matches = [
            r for r in self._records
            if r.mode == query.mode
            and (query.grid_size is None or r.grid_size == query.grid_size)
        ]
        # Stable sort keeps earlier records ahead on equal scores.
        matches.sort(key=lambda r: r.score, reverse=True)
        return matches[:query.limit]


async def save_record(sink: RecordSink, record: ScoreRecord) -> bool:
    """Save *record*, logging instead of raising on sink failure."""
    try:
        await sink.save(record)
    except Exception:
        logger.exception(
            "Failed saving %s record (score=%d).", record.mode.value, record.score,
        )
        return False
    logger.info(
        "Saved %s record for %s (score=%d).",
        record.mode.value, record.player_name, record.score,
    )
    return True


async def fetch_leaderboard(
    sink: RecordSink, query: LeaderboardQuery,
) -> list[ScoreRecord]:
    """Fetch the top records, returning an empty list on sink failure."""
    try:
        return await sink.fetch_top(query)
    except Exception:
        logger.exception("Failed fetching %s leaderboard.", query.mode.value)
        return []
