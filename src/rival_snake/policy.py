"""Greedy decision policy for the AI-controlled snake."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from rival_snake.collision import check_collision
from rival_snake.grid import Cell, manhattan
from rival_snake.snake import Direction, Snake, step


class MoveCandidate(NamedTuple):
    """A prospective AI move: the cell it would enter and how to get there."""

    target: Cell
    direction: Direction


@dataclass(frozen=True)
class AliveAI:
    """The AI snake is on the board."""

    snake: Snake

    @property
    def alive(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {"alive": True, **self.snake.to_dict()}


@dataclass(frozen=True)
class DeadAI:
    """The AI snake has been removed from the board.

    ``reason`` is ``"trapped"`` when no legal move existed and
    ``"head_on"`` when it met the player head to head.
    """

    died_at_tick: int
    reason: str

    @property
    def alive(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "alive": False,
            "died_at_tick": self.died_at_tick,
            "reason": self.reason,
        }


AIState = AliveAI | DeadAI


def occupied_by(ai: AIState | None) -> tuple[Cell, ...]:
    """Cells covered by the AI, empty when it is dead or absent."""
    return ai.snake.body if isinstance(ai, AliveAI) else ()


def candidate_moves(head: Cell) -> list[MoveCandidate]:
    """Enumerate the four orthogonal moves from *head* in direction order."""
    return [
        MoveCandidate(step((head,), direction), direction)
        for direction in Direction
    ]


def legal_moves(
    candidates: Iterable[MoveCandidate],
    obstacles: Sequence[Cell],
    grid_size: int,
) -> list[MoveCandidate]:
    """Drop candidates that leave the board or run into an obstacle."""
    return [
        move for move in candidates
        if not check_collision(move.target, obstacles, grid_size)
    ]


def choose_best_move(
    moves: Sequence[MoveCandidate], target: Cell,
) -> MoveCandidate | None:
    """Pick the move closest to *target* by Manhattan distance.

    ``min`` keeps the first of several equal candidates, so ties resolve
    in the order the moves were enumerated.
    """
    if not moves:
        return None
    return min(moves, key=lambda move: manhattan(move.target, target))


def decide(
    snake: Snake,
    food: Cell,
    grid_size: int,
    others: Sequence[Cell] = (),
) -> MoveCandidate | None:
    """Return the greedy move for *snake*, or ``None`` if it is boxed in.

    *others* holds the cells of every other snake on the board; the
    snake's own body, head included, is always an obstacle. This policy has
    no lookahead and can trap itself inside its own body.
    """
    obstacles = (*others, *snake.body)
    moves = legal_moves(candidate_moves(snake.head), obstacles, grid_size)
    return choose_best_move(moves, food)
