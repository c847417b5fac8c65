"""Collision checks shared by the player and AI movement paths."""

from __future__ import annotations

from collections.abc import Iterable

from rival_snake.grid import Cell, in_bounds


def check_collision(
    candidate_head: Cell, obstacles: Iterable[Cell], grid_size: int,
) -> bool:
    """Return True if *candidate_head* leaves the board or hits an obstacle.

    The obstacle list is assembled by the caller. For the player it is the
    player's body without its head plus the whole AI body; for the AI it is
    the whole player body plus the whole AI body.
    """
    if not in_bounds(candidate_head, grid_size):
        return True
    return any(segment == candidate_head for segment in obstacles)


def heads_collide(player_next: Cell, ai_next: Cell | None) -> bool:
    """Detect two heads about to enter the same cell on the same tick.

    Kept separate from :func:`check_collision` because both heads move
    simultaneously and neither body contains the other's future head.
    """
    return ai_next is not None and player_next == ai_next
