"""Rival Snake — tick-driven snake game core with a greedy AI opponent."""

from rival_snake.config import GameConfig, GameMode
from rival_snake.engine import GameEngine, GameState, advance, initial_state
from rival_snake.errors import ConfigurationError, FoodPlacementError
from rival_snake.grid import Cell, in_bounds
from rival_snake.policy import AIState, AliveAI, DeadAI, MoveCandidate
from rival_snake.scheduler import GameSession, SessionStatus
from rival_snake.snake import Direction, Snake

__all__ = [
    "AIState",
    "AliveAI",
    "Cell",
    "ConfigurationError",
    "DeadAI",
    "Direction",
    "FoodPlacementError",
    "GameConfig",
    "GameEngine",
    "GameMode",
    "GameSession",
    "GameState",
    "MoveCandidate",
    "SessionStatus",
    "Snake",
    "advance",
    "in_bounds",
    "initial_state",
]
