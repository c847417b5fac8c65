"""Grid geometry for the square game board."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np

from rival_snake.errors import ConfigurationError

MIN_GRID_SIZE = 2


class Cell(NamedTuple):
    """A board coordinate. ``x`` grows rightwards, ``y`` grows downwards."""

    x: int
    y: int


def validate_grid_size(grid_size: int) -> int:
    """Return *grid_size* unchanged, or raise if the board would be unusable."""
    if grid_size < MIN_GRID_SIZE:
        raise ConfigurationError(
            f"grid_size must be at least {MIN_GRID_SIZE}, got {grid_size}."
        )
    return grid_size


def in_bounds(cell: Cell, grid_size: int) -> bool:
    """Check whether a cell lies within an N×N grid."""
    return 0 <= cell.x < grid_size and 0 <= cell.y < grid_size


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def occupancy_mask(
    grid_size: int, snakes: Iterable[Sequence[Cell]],
) -> np.ndarray:
    """Return a boolean ``(grid_size, grid_size)`` array indexed ``[y, x]``.

    Cells outside the board are ignored so that callers can pass raw
    bodies without pre-filtering.
    """
    mask = np.zeros((grid_size, grid_size), dtype=bool)
    for body in snakes:
        for cell in body:
            if in_bounds(cell, grid_size):
                mask[cell.y, cell.x] = True
    return mask


def free_cells(grid_size: int, snakes: Iterable[Sequence[Cell]]) -> list[Cell]:
    """Return every unoccupied cell in row-major order."""
    ys, xs = np.nonzero(~occupancy_mask(grid_size, snakes))
    return [Cell(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True)]
