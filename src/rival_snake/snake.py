"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from rival_snake.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    Declaration order matters: the AI enumerates and breaks ties in this
    order.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def is_reversal(current: Direction, requested: Direction) -> bool:
    """Return True if *requested* points straight back into the neck."""
    return _OPPOSITES[current] is requested


def step(body: Sequence[Cell], direction: Direction) -> Cell:
    """Compute the next head position for *body* moving in *direction*.

    Does not check collisions or food; the caller decides whether the
    move is committed and whether the tail is kept.
    """
    dx, dy = direction.value
    head = body[0]
    return Cell(head.x + dx, head.y + dy)


@dataclass(frozen=True)
class Snake:
    """An immutable snake body, head first.

    The head is ``body[0]``; the tail is ``body[-1]``. ``direction`` is the
    last committed direction of travel.
    """

    body: tuple[Cell, ...]
    direction: Direction = Direction.RIGHT

    def __post_init__(self) -> None:
        if not self.body:
            raise ValueError("Snake length must be at least 1.")

    @classmethod
    def spawn(cls, cell: Cell, direction: Direction = Direction.RIGHT) -> Snake:
        """Create a fresh single-cell snake."""
        return cls(body=(Cell(*cell),), direction=direction)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Compute the next head position without moving."""
        return step(self.body, direction or self.direction)

    def advanced(
        self, new_head: Cell, direction: Direction, grow: bool = False,
    ) -> Snake:
        """Return the snake after moving its head to *new_head*.

        The tail is kept on a growth tick and dropped otherwise.
        """
        kept = self.body if grow else self.body[:-1]
        moved = Snake(body=(new_head, *kept), direction=direction)
        assert len(set(moved.body)) == len(moved.body), (  # noqa: S101
            f"snake body overlaps itself: {moved.body}"
        )
        return moved

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
