"""Step-based game session composing grid, snake, and apple logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from term_snake.apple import AppleSpawner, RandomSource
from term_snake.config import GameConfig
from term_snake.grid import CellType, Grid
from term_snake.snake import Direction, Point, Snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session handed to renderers."""

    width: int
    height: int
    snake: tuple[Point, ...]
    apple: Point
    score: int
    level: int
    over: bool

    @property
    def head(self) -> Point:
        return self.snake[0]


class GameSession:
    """Single-snake, step-based game session.

    The session owns the grid, snake, and apple spawner. Each call to
    :meth:`step` advances the game by one tick and returns a snapshot of
    the updated state. Nothing here raises at runtime: reversing input is
    dropped and stepping a finished game does nothing.
    """

    def __init__(
        self,
        width: int,
        height: int,
        config: GameConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.width = max(width, self.config.min_width)
        self.height = max(height, self.config.min_height)
        self.grid = Grid(self.width, self.height)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        start = Point(self.width // 2, self.height // 2)
        self.snake = Snake(start, Direction.RIGHT, self.config.initial_length)
        self.next_direction = self.snake.direction

        # Paint initial snake onto the grid.
        for seg in self.snake.body:
            self.grid.set(seg, CellType.SNAKE)

        self.apple_spawner = AppleSpawner(
            self.grid, rng=self.rng,
            max_attempts=self.config.max_apple_attempts,
        )
        self.apple_spawner.place()

        self.score = 0
        self.level = 1
        self.over = False

    @property
    def direction(self) -> Direction:
        """The committed direction applied on the most recent step."""
        return self.snake.direction

    @property
    def apple(self) -> Point:
        return self.apple_spawner.position

    def set_direction(self, requested: Direction) -> None:
        """Queue *requested* for the next step unless it reverses the snake.

        The check is made against the committed direction, not the pending
        one, so a quick sequence of keys cannot fold the head into the neck.
        """
        if requested.is_opposite(self.snake.direction):
            return
        self.next_direction = requested

    def step(self) -> SessionSnapshot:
        """Advance the game by one tick."""
        if self.over:
            return self.snapshot()

        self.snake.direction = self.next_direction
        new_head = self.snake.next_head()

        # --- wall check ---
        if not self.grid.in_bounds(new_head):
            self._end("wall", new_head)
            return self.snapshot()

        # --- self-collision check ---
        # The tail has not moved yet, so running into it is fatal.
        if self.grid.get(new_head) == CellType.SNAKE:
            self._end("self", new_head)
            return self.snapshot()

        # --- move ---
        ate = new_head == self.apple
        vacated = self.snake.advance(new_head, grow=ate)
        self.grid.set(new_head, CellType.SNAKE)
        if vacated is not None:
            self.grid.set(vacated, CellType.EMPTY)

        if ate:
            self.score += 1
            if self.score % self.config.apples_per_level == 0:
                self.level = 1 + self.score // self.config.apples_per_level
                logger.info(
                    "Reached level %d at score %d.", self.level, self.score,
                )
            self.apple_spawner.place()

        return self.snapshot()

    def tick_interval(self) -> int:
        """Milliseconds between automatic steps at the current level."""
        cfg = self.config
        reduced = cfg.base_tick_ms - (self.level - 1) * cfg.tick_reduction_ms
        return max(cfg.min_tick_ms, reduced)

    def snapshot(self) -> SessionSnapshot:
        """Return a read-only view of the current state."""
        return SessionSnapshot(
            width=self.width,
            height=self.height,
            snake=self.snake.segments(),
            apple=self.apple,
            score=self.score,
            level=self.level,
            over=self.over,
        )

    def _end(self, cause: str, at: Point) -> None:
        self.over = True
        logger.info(
            "Game over (%s collision at %s) with score %d, level %d.",
            cause, tuple(at), self.score, self.level,
        )
