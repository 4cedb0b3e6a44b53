"""Application loop: menu, play, and game-over modes around a GameSession."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from term_snake.config import GameConfig
from term_snake.controls import MOVEMENT, Key
from term_snake.engine import GameSession, SessionSnapshot
from term_snake.render import MenuSnapshot

logger = logging.getLogger(__name__)

# Screen space that is not play field: the board's left and right border
# columns, and the header, two border rows, and status rows.
BORDER_COLUMNS = 2
CHROME_ROWS = 4


class InputSource(Protocol):
    def poll(self, timeout_ms: int) -> bool: ...

    def read(self) -> Key: ...


class Renderer(Protocol):
    def draw(self, snapshot: MenuSnapshot | SessionSnapshot) -> None: ...


@dataclass(frozen=True)
class Menu:
    """Waiting for the player to start a game."""


@dataclass(frozen=True)
class Playing:
    session: GameSession


@dataclass(frozen=True)
class GameOver:
    session: GameSession


Mode = Menu | Playing | GameOver


class GameApp:
    """Drives the mode state machine from input events and a tick timer.

    The app owns the active :class:`GameSession` exclusively. Each loop
    iteration draws once, waits at most one poll timeout for a key, applies
    it, then steps the session if a full tick interval has elapsed.

    *display_size* returns the current ``(rows, columns)`` of the screen and
    is consulted every time a session is built, so a resized terminal gets a
    board that fits it.
    """

    def __init__(
        self,
        input_source: InputSource,
        renderer: Renderer,
        display_size: Callable[[], tuple[int, int]],
        config: GameConfig | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.input = input_source
        self.renderer = renderer
        self.display_size = display_size
        self.config = config or GameConfig()
        self.clock = clock
        self._seeds = np.random.SeedSequence(seed)
        self.mode: Mode = Menu()
        self._last_tick = clock()

    def new_session(self) -> GameSession:
        """Build a session sized to the current display."""
        rows, columns = self.display_size()
        rng = np.random.default_rng(self._seeds.spawn(1)[0])
        session = GameSession(
            columns - BORDER_COLUMNS,
            rows - CHROME_ROWS,
            config=self.config,
            rng=rng,
        )
        logger.debug(
            "New %dx%d session for a %dx%d display.",
            session.width, session.height, columns, rows,
        )
        return session

    def snapshot(self) -> MenuSnapshot | SessionSnapshot:
        if isinstance(self.mode, Menu):
            return MenuSnapshot()
        return self.mode.session.snapshot()

    def poll_timeout(self) -> int:
        """Short polls while playing keep the tick timer responsive."""
        if isinstance(self.mode, Playing):
            return self.config.play_poll_ms
        return self.config.idle_poll_ms

    def handle_key(self, key: Key) -> bool:
        """Apply one key press. Returns False when the player quits."""
        if key is Key.QUIT:
            return False

        mode = self.mode
        if isinstance(mode, Menu):
            if key is Key.START:
                self._start()
        elif isinstance(mode, Playing):
            if key is Key.RESTART:
                self._start()
            elif key in MOVEMENT:
                mode.session.set_direction(MOVEMENT[key])
        elif isinstance(mode, GameOver):
            if key is Key.RESTART:
                self._start()
        return True

    def tick(self, now: float) -> None:
        """Step the session once a full tick interval has elapsed."""
        mode = self.mode
        if not isinstance(mode, Playing):
            return
        elapsed_ms = (now - self._last_tick) * 1000.0
        if elapsed_ms < mode.session.tick_interval():
            return
        self._last_tick = now
        if mode.session.step().over:
            self._transition(GameOver(mode.session))

    def run(self) -> None:
        """Loop until the player quits."""
        while True:
            self.renderer.draw(self.snapshot())
            if self.input.poll(self.poll_timeout()):
                if not self.handle_key(self.input.read()):
                    logger.info("Quit requested.")
                    return
            self.tick(self.clock())

    def _start(self) -> None:
        self._transition(Playing(self.new_session()))
        self._last_tick = self.clock()

    def _transition(self, mode: Mode) -> None:
        logger.debug(
            "Mode %s -> %s.", type(self.mode).__name__, type(mode).__name__,
        )
        self.mode = mode
