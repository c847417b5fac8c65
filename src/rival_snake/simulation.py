"""Headless simulation and throughput measurement."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace

import numpy as np

from rival_snake.config import GameConfig
from rival_snake.engine import GameEngine, GameState
from rival_snake.errors import FoodPlacementError
from rival_snake.policy import DeadAI, candidate_moves, choose_best_move, legal_moves
from rival_snake.snake import Direction, is_reversal

logger = logging.getLogger(__name__)


def autopilot_direction(state: GameState) -> Direction:
    """Steer the player with the same greedy rule the AI uses.

    Reversals are excluded up front since the engine would refuse them.
    If every move is fatal the current heading is kept.
    """
    player = state.player
    obstacles = (*player.body, *state.ai_body)
    moves = [
        move for move in legal_moves(
            candidate_moves(player.head), obstacles, state.grid_size,
        )
        if not is_reversal(player.direction, move.direction)
    ]
    best = choose_best_move(moves, state.food)
    return best.direction if best is not None else player.direction


@dataclass
class SimulationResult:
    """Aggregate outcome of a batch of headless games."""

    total_games: int
    total_ticks: int
    finished_games: int
    mean_score: float
    mean_ai_score: float
    ai_deaths: int
    wall_time_seconds: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.total_games} games "
            f"({self.finished_games} ended), "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.2f}, "
            f"mean AI score {self.mean_ai_score:.2f}, "
            f"{self.ai_deaths} AI deaths, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def simulate(
    config: GameConfig,
    *,
    num_games: int = 100,
    max_ticks: int = 500,
    seed: int = 42,
) -> SimulationResult:
    """Play *num_games* autopilot games and aggregate the results.

    Each game is capped at *max_ticks*; capped games still count towards
    the score averages. A game that fills the board ends there.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    rng = np.random.default_rng(seed)

    scores: list[int] = []
    ai_scores: list[int] = []
    total_ticks = 0
    finished = 0
    ai_deaths = 0
    start = time.perf_counter()

    for _ in range(num_games):
        engine = GameEngine(replace(config, seed=int(rng.integers(2**31))))
        ai_was_alive = engine.state.ai is not None
        for _ in range(max_ticks):
            engine.set_direction(autopilot_direction(engine.state))
            try:
                state = engine.step()
            except FoodPlacementError:
                state = engine.finish()
            ai_dead = isinstance(state.ai, DeadAI)
            if ai_was_alive and ai_dead:
                ai_deaths += 1
            ai_was_alive = state.ai is not None and not ai_dead
            if state.is_game_over:
                finished += 1
                break
        total_ticks += engine.state.tick
        scores.append(engine.state.score)
        ai_scores.append(engine.state.ai_score)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        total_games=num_games,
        total_ticks=total_ticks,
        finished_games=finished,
        mean_score=float(np.mean(scores)),
        mean_ai_score=float(np.mean(ai_scores)),
        ai_deaths=ai_deaths,
        wall_time_seconds=elapsed,
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info("%s", result.summary())
    return result
