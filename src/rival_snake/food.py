"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from rival_snake.errors import FoodPlacementError
from rival_snake.grid import Cell, free_cells

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


def place_food(
    grid_size: int,
    occupied: Iterable[Sequence[Cell]],
    rng: np.random.Generator | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Cell:
    """Pick a uniformly random cell not covered by any of *occupied*.

    Rejection-samples the whole board first. Once *max_attempts* draws
    have all landed on snakes, falls back to choosing among the free
    cells directly, which stays uniform and cannot spin forever.

    Raises :class:`FoodPlacementError` if the board is full.
    """
    rng = rng if rng is not None else np.random.default_rng()
    bodies = [tuple(body) for body in occupied]
    taken = {cell for body in bodies for cell in body}

    for _ in range(max_attempts):
        x, y = rng.integers(0, grid_size, size=2).tolist()
        candidate = Cell(x, y)
        if candidate not in taken:
            return candidate

    empty = free_cells(grid_size, bodies)
    if not empty:
        raise FoodPlacementError(
            f"No free cell left for food on a {grid_size}x{grid_size} board."
        )
    logger.warning(
        "Food sampling exhausted %d attempts; choosing among %d free cells.",
        max_attempts,
        len(empty),
    )
    return empty[int(rng.integers(len(empty)))]
