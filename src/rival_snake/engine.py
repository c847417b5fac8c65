"""Tick-based game engine composing movement, collision, food and AI logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np

from rival_snake.collision import check_collision, heads_collide
from rival_snake.config import GameConfig
from rival_snake.food import place_food
from rival_snake.grid import Cell, in_bounds
from rival_snake.policy import AIState, AliveAI, DeadAI, decide, occupied_by
from rival_snake.snake import Direction, Snake, is_reversal

logger = logging.getLogger(__name__)


def player_spawn(grid_size: int) -> Cell:
    return Cell(0, grid_size // 2)


def ai_spawn(grid_size: int) -> Cell:
    return Cell(grid_size - 1, grid_size // 2)


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a session between two ticks.

    ``ai`` is ``None`` only when the session has no opponent at all; a
    dead opponent is represented by :class:`DeadAI`.
    """

    tick: int
    player: Snake
    ai: AIState | None
    food: Cell
    score: int
    ai_score: int
    is_game_over: bool
    grid_size: int
    revive_enabled: bool

    @property
    def direction(self) -> Direction:
        return self.player.direction

    @property
    def ai_body(self) -> tuple[Cell, ...]:
        return occupied_by(self.ai)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "ai_score": self.ai_score,
            "game_over": self.is_game_over,
            "grid_size": self.grid_size,
            "revive_enabled": self.revive_enabled,
            "food": list(self.food),
            "player": self.player.to_dict(),
            "ai": self.ai.to_dict() if self.ai is not None else None,
        }


def initial_state(config: GameConfig, rng: np.random.Generator) -> GameState:
    """Build a fresh session: single-cell snakes, new food, zero scores."""
    size = config.grid_size
    player = Snake.spawn(player_spawn(size), Direction.RIGHT)
    ai: AIState | None = None
    if config.has_opponent:
        ai = AliveAI(Snake.spawn(ai_spawn(size), Direction.LEFT))

    food = place_food(
        size, [player.body, occupied_by(ai)], rng, config.food_max_attempts,
    )
    return GameState(
        tick=0,
        player=player,
        ai=ai,
        food=food,
        score=0,
        ai_score=0,
        is_game_over=False,
        grid_size=size,
        revive_enabled=config.revive_enabled,
    )


def _maybe_revive(
    state: GameState, config: GameConfig, tick: int, direction: Direction,
) -> AIState | None:
    """Respawn a dead AI once its delay has elapsed and its cell is clear."""
    ai = state.ai
    if not (config.revive_enabled and isinstance(ai, DeadAI)):
        return ai
    if tick - ai.died_at_tick < config.revive_delay_ticks:
        return ai

    spawn = ai_spawn(state.grid_size)
    # The spawn cell must be clear of the player, its next head and the food.
    if (
        state.player.occupies(spawn)
        or state.player.next_head(direction) == spawn
        or state.food == spawn
    ):
        return ai

    logger.info("AI snake revived at tick %d.", tick)
    return AliveAI(Snake.spawn(spawn, Direction.LEFT))


def advance(
    state: GameState,
    config: GameConfig,
    direction: Direction,
    rng: np.random.Generator,
) -> GameState:
    """Compute the state one tick after *state*.

    Order within a tick: AI revival, the head-on check, the player move,
    then the AI move. A head-on meeting kills the AI and lets the player
    continue. A player collision ends the session with no further movement.
    """
    if state.is_game_over:
        return state

    size = state.grid_size
    tick = state.tick + 1
    player = state.player
    food = state.food
    score = state.score
    ai_score = state.ai_score
    ai = _maybe_revive(state, config, tick, direction)

    player_next = player.next_head(direction)

    if isinstance(ai, AliveAI):
        intent = decide(ai.snake, food, size, player.body)
        if heads_collide(player_next, intent.target if intent else None):
            logger.info("AI snake died head-on at tick %d.", tick)
            ai = DeadAI(died_at_tick=tick, reason="head_on")

    obstacles = (*player.body[1:], *occupied_by(ai))
    if check_collision(player_next, obstacles, size):
        logger.info("Player died at tick %d with score %d.", tick, score)
        return replace(state, tick=tick, ai=ai, is_game_over=True)

    ate = player_next == food
    player = player.advanced(player_next, direction, grow=ate)
    if ate:
        score += 1
        food = place_food(
            size, [player.body, occupied_by(ai)], rng, config.food_max_attempts,
        )

    if isinstance(ai, AliveAI):
        move = decide(ai.snake, food, size, player.body)
        if move is None:
            logger.info("AI snake trapped at tick %d.", tick)
            ai = DeadAI(died_at_tick=tick, reason="trapped")
        else:
            ai_ate = move.target == food
            ai = AliveAI(ai.snake.advanced(move.target, move.direction, ai_ate))
            if ai_ate:
                ai_score += 1
                food = place_food(
                    size, [player.body, ai.snake.body], rng,
                    config.food_max_attempts,
                )

    assert in_bounds(player.head, size), player.head  # noqa: S101
    return GameState(
        tick=tick,
        player=player,
        ai=ai,
        food=food,
        score=score,
        ai_score=ai_score,
        is_game_over=False,
        grid_size=size,
        revive_enabled=state.revive_enabled,
    )


class GameEngine:
    """Owns the current :class:`GameState` and the buffered player input.

    Each call to :meth:`step` advances the game by one tick and replaces
    the state wholesale; nothing mutates a published snapshot.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config or GameConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self._pending_direction: Direction | None = None
        self.state = self.reset()

    @property
    def game_over(self) -> bool:
        return self.state.is_game_over

    def reset(self) -> GameState:
        """Discard the current session and start a fresh one."""
        self._pending_direction = None
        self.state = initial_state(self.config, self.rng)
        return self.state

    def set_direction(self, direction: Direction) -> bool:
        """Buffer *direction* for the next tick, replacing any earlier request.

        A turn straight back along the last committed direction is refused.
        Returns whether the request was buffered.
        """
        if is_reversal(self.state.direction, direction):
            return False
        self._pending_direction = direction
        return True

    def step(self) -> GameState:
        """Advance the game by one tick and return the new snapshot."""
        if self.state.is_game_over:
            return self.state
        direction = self._pending_direction or self.state.direction
        self._pending_direction = None
        self.state = advance(self.state, self.config, direction, self.rng)
        return self.state

    def finish(self) -> GameState:
        """End the session where it stands, e.g. once no cell is left for food."""
        self.state = replace(self.state, is_game_over=True)
        return self.state

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.state.to_dict()
