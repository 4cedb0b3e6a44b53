"""curses adapters: terminal session scope, key input, and screen drawing."""

from __future__ import annotations

import curses
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from term_snake.controls import Key, decode_key
from term_snake.engine import SessionSnapshot
from term_snake.render import (
    BOARD_TITLE,
    CONTROLS_HINT,
    GAME_OVER_HINT,
    GLYPHS,
    TITLE,
    Glyph,
    MenuSnapshot,
    board_cells,
    centered,
)

logger = logging.getLogger(__name__)

# Colour pair ids by role.
_PAIRS: dict[str, tuple[int, int]] = {
    "title": (1, curses.COLOR_YELLOW),
    "score": (2, curses.COLOR_GREEN),
    "level": (3, curses.COLOR_CYAN),
    "board_title": (4, curses.COLOR_MAGENTA),
    "apple": (5, curses.COLOR_RED),
    "snake": (6, curses.COLOR_GREEN),
}


class TerminalError(OSError):
    """Any failure talking to the terminal."""


@contextmanager
def terminal_session() -> Iterator[curses.window]:
    """Put the terminal in game mode and always restore it afterwards.

    curses errors raised inside the block surface as :class:`TerminalError`.
    """
    try:
        stdscr = curses.initscr()
    except curses.error as exc:
        raise TerminalError(f"Could not initialise terminal: {exc}") from exc

    try:
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        _hide_cursor()
        _init_colours()
        yield stdscr
    except curses.error as exc:
        raise TerminalError(str(exc)) from exc
    finally:
        _restore(stdscr)


def _restore(stdscr: curses.window) -> None:
    """Undo the game-mode settings. Failures here are logged, not raised."""
    try:
        stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
    except curses.error:
        logger.warning("Could not reset terminal input modes.", exc_info=True)
    try:
        curses.endwin()
    except curses.error:
        logger.warning("Could not end the curses session.", exc_info=True)
        return
    logger.debug("Terminal restored.")


def _hide_cursor() -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor.")


def _init_colours() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    background = curses.COLOR_BLACK
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        logger.debug("Terminal has no default colours; using black.")
    for pair_id, colour in _PAIRS.values():
        curses.init_pair(pair_id, colour, background)


def display_size(window: curses.window) -> tuple[int, int]:
    """Return the window size as ``(rows, columns)``."""
    return window.getmaxyx()


class CursesInput:
    """Non-blocking key source over a curses window.

    ``getch`` with a timeout both waits and reads, so :meth:`poll` keeps the
    key it saw until :meth:`read` collects it.
    """

    def __init__(self, window: curses.window) -> None:
        self.window = window
        self._pending: int | None = None

    def poll(self, timeout_ms: int) -> bool:
        if self._pending is not None:
            return True
        self.window.timeout(timeout_ms)
        code = self.window.getch()
        if code == -1:
            return False
        self._pending = code
        return True

    def read(self) -> Key:
        if self._pending is None:
            self.window.timeout(-1)
            code = self.window.getch()
        else:
            code, self._pending = self._pending, None
        return decode_key(code)


class CursesRenderer:
    """Paints menu and session snapshots onto a curses window.

    Each frame is a full redraw. Text that does not fit the window is
    clipped rather than treated as an error.
    """

    def __init__(self, window: curses.window) -> None:
        self.window = window
        # Colour support is only known once curses is initialised.
        self._colours: bool | None = None

    def draw(self, snapshot: MenuSnapshot | SessionSnapshot) -> None:
        if self._colours is None:
            self._colours = curses.has_colors()
        self.window.erase()
        if isinstance(snapshot, MenuSnapshot):
            self._draw_menu(snapshot)
        else:
            self._draw_game(snapshot)
        self.window.refresh()

    def _attr(self, role: str, bold: bool = False) -> int:
        attr = curses.A_BOLD if bold else curses.A_NORMAL
        if self._colours:
            attr |= curses.color_pair(_PAIRS[role][0])
        return attr

    def _put(self, row: int, col: int, text: str, attr: int = 0) -> None:
        try:
            self.window.addstr(row, col, text, attr)
        except curses.error:
            # Off-screen or bottom-right corner; nothing to draw there.
            pass

    def _box(self, top: int, left: int, height: int, width: int) -> None:
        inner = width - 2
        self._put(top, left, "┌" + "─" * inner + "┐")
        for row in range(top + 1, top + height - 1):
            self._put(row, left, "│")
            self._put(row, left + width - 1, "│")
        self._put(top + height - 1, left, "└" + "─" * inner + "┘")

    def _draw_menu(self, menu: MenuSnapshot) -> None:
        rows, columns = self.window.getmaxyx()
        self._box(0, 0, rows, columns)
        self._put(0, 1, menu.title, curses.A_BOLD)
        inner = columns - 2
        for offset, line in enumerate(menu.lines):
            attr = curses.A_BOLD if offset == 0 else curses.A_NORMAL
            self._put(1 + offset, 1 + centered(line, inner), line, attr)

    def _draw_game(self, snap: SessionSnapshot) -> None:
        # Header
        col = 0
        for text, attr in (
            (TITLE, self._attr("title")),
            ("  ", curses.A_NORMAL),
            (f"Score: {snap.score}", self._attr("score")),
            ("  ", curses.A_NORMAL),
            (f"Level: {snap.level}", self._attr("level")),
        ):
            self._put(0, col, text, attr)
            col += len(text)

        # Board
        self._box(1, 0, snap.height + 2, snap.width + 2)
        self._put(1, 1, BOARD_TITLE, self._attr("board_title"))
        styles = {
            Glyph.APPLE: self._attr("apple", bold=True),
            Glyph.HEAD: self._attr("snake", bold=True),
            Glyph.BODY: self._attr("snake"),
        }
        for y, row in enumerate(board_cells(snap)):
            for x, glyph in enumerate(row):
                if glyph is Glyph.EMPTY:
                    continue
                self._put(2 + y, 1 + x, GLYPHS[glyph], styles[glyph])

        # Status
        status_row = snap.height + 3
        self._put(status_row, 0, CONTROLS_HINT)
        if snap.over:
            self._put(
                status_row, len(CONTROLS_HINT) + 2, GAME_OVER_HINT,
                self._attr("apple", bold=True),
            )
