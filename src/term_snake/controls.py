"""Logical key identities and decoding of raw terminal key codes."""

from __future__ import annotations

import curses
import enum

from term_snake.snake import Direction


class Key(enum.Enum):
    """Keys the game reacts to. Anything else decodes to ``OTHER``."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    RESTART = "restart"
    START = "start"
    OTHER = "other"


_KEYMAP: dict[int, Key] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.START,
    ord("\n"): Key.START,
    ord("\r"): Key.START,
    ord(" "): Key.START,
}
for _chars, _key in (
    ("wW", Key.UP),
    ("sS", Key.DOWN),
    ("aA", Key.LEFT),
    ("dD", Key.RIGHT),
    ("qQ", Key.QUIT),
    ("rR", Key.RESTART),
):
    for _ch in _chars:
        _KEYMAP[ord(_ch)] = _key

MOVEMENT: dict[Key, Direction] = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


def decode_key(code: int) -> Key:
    """Map a curses ``getch`` code to a logical :class:`Key`."""
    return _KEYMAP.get(code, Key.OTHER)
