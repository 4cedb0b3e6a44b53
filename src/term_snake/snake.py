"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple


class Point(NamedTuple):
    """Integer grid coordinate. ``x`` is the column, ``y`` the row."""

    x: int
    y: int


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_opposite(self, other: Direction) -> bool:
        """Return True if *other* would reverse this direction."""
        return _OPPOSITES[self] is other


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of :class:`Point` segments.

    The head is ``body[0]``; the tail is ``body[-1]``. The snake itself does
    no bounds or collision checking; :class:`~term_snake.engine.GameSession`
    validates a move before calling :meth:`advance`.
    """

    def __init__(
        self,
        head: Point,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Point] = deque(
            Point(head.x - dx * i, head.y - dy * i) for i in range(length)
        )
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.body[0]

    def next_head(self, direction: Direction | None = None) -> Point:
        """Compute the next head position without moving.

        Uses signed arithmetic, so stepping off the low edge yields a
        negative coordinate rather than a clamped one.
        """
        dx, dy = (direction or self.direction).value
        return Point(self.head.x + dx, self.head.y + dy)

    def advance(self, new_head: Point, grow: bool = False) -> Point | None:
        """Push *new_head* onto the front of the body.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()

    def segments(self) -> tuple[Point, ...]:
        """Return an immutable copy of the body, head first."""
        return tuple(self.body)
