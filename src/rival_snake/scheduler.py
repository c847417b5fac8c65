"""Async tick loop driving a single game session."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

from rival_snake.config import GameConfig
from rival_snake.engine import GameEngine, GameState
from rival_snake.errors import FoodPlacementError
from rival_snake.records import Identity, RecordSink, ScoreRecord, save_record
from rival_snake.snake import Direction

logger = logging.getLogger(__name__)

TickListener = Callable[[GameState], Awaitable[None]]


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameSession:
    """Runs a :class:`GameEngine` on a fixed-period asyncio timer.

    ``Idle -> Running -> GameOver -> Idle`` (on :meth:`restart`). Exactly
    one tick runs at a time. When the player dies the loop exits before
    sleeping again, and the final score is handed to the record sink in a
    background task that never blocks or fails the session.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        sink: RecordSink | None = None,
        identity: Identity | None = None,
    ) -> None:
        self.engine = GameEngine(config)
        self.sink = sink
        self.identity = identity
        self.status = SessionStatus.IDLE
        self.ticks_run = 0
        self._listeners: list[TickListener] = []
        self._task: asyncio.Task | None = None
        self._pending_saves: set[asyncio.Task] = set()

    @property
    def config(self) -> GameConfig:
        return self.engine.config

    @property
    def state(self) -> GameState:
        return self.engine.state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit_direction(self, direction: Direction) -> bool:
        """Buffer a direction for the next tick (last write wins)."""
        if self.status != SessionStatus.RUNNING:
            return False
        return self.engine.set_direction(direction)

    def start(self) -> None:
        """Start ticking. Only valid from the idle state."""
        if self.status != SessionStatus.IDLE:
            raise ValueError(f"Cannot start a session that is {self.status.value}.")
        self.status = SessionStatus.RUNNING
        self._task = asyncio.create_task(self._tick_loop())
        logger.info(
            "Session started (mode=%s, grid=%d).",
            self.config.mode.value, self.config.grid_size,
        )

    async def stop(self) -> None:
        """Cancel the timer if it is still running.

        A session stopped mid-game goes back to idle with its board intact,
        so :meth:`start` resumes it.
        """
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        if self.status == SessionStatus.RUNNING:
            self.status = SessionStatus.IDLE

    async def restart(self) -> GameState:
        """Stop any running loop and return to a fresh idle session."""
        await self.stop()
        self.status = SessionStatus.IDLE
        self.ticks_run = 0
        return self.engine.reset()

    async def close(self) -> None:
        """Stop ticking and wait for outstanding record saves."""
        await self.stop()
        if self._pending_saves:
            await asyncio.gather(*self._pending_saves, return_exceptions=True)

    async def _tick_loop(self) -> None:
        tick_interval = self.config.tick_rate_ms / 1000.0
        try:
            while self.status == SessionStatus.RUNNING:
                await asyncio.sleep(tick_interval)
                state = self.tick()
                await self._notify(state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error.")
            self.status = SessionStatus.GAME_OVER

    def tick(self) -> GameState:
        """Advance one tick synchronously and handle the game-over transition."""
        try:
            state = self.engine.step()
        except FoodPlacementError:
            logger.warning(
                "Board full at tick %d; ending session.", self.state.tick + 1,
            )
            state = self.engine.finish()
        self.ticks_run += 1
        if state.is_game_over and self.status == SessionStatus.RUNNING:
            self.status = SessionStatus.GAME_OVER
            logger.info(
                "Session over after %d ticks (score=%d, ai_score=%d).",
                state.tick, state.score, state.ai_score,
            )
            self._record(state)
        return state

    async def _notify(self, state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception:
                logger.warning("Tick listener failed; dropping it.")
                self.remove_listener(listener)

    def _record(self, state: GameState) -> None:
        if self.sink is None:
            return
        record = ScoreRecord.from_session(
            score=state.score,
            opponent_score=state.ai_score if self.config.has_opponent else None,
            mode=self.config.mode,
            grid_size=self.config.grid_size,
            identity=self.identity,
        )
        task = asyncio.create_task(save_record(self.sink, record))
        self._pending_saves.add(task)
        task.add_done_callback(self._pending_saves.discard)
