"""Pure rendering of menu and board snapshots into glyph grids.

Everything here produces plain data so the layout can be tested without
a terminal. :mod:`term_snake.terminal` paints the result with colours.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from term_snake.engine import SessionSnapshot

TITLE = " Snake (Python + curses) "
BOARD_TITLE = " Game "
CONTROLS_HINT = "Use W A S D to move. Q to quit."
GAME_OVER_HINT = "GAME OVER - Press R to restart or Q to quit"

APPLE_GLYPH = "@"
SNAKE_GLYPH = "■"
EMPTY_GLYPH = " "


class Glyph(enum.Enum):
    """What occupies a rendered board cell."""

    EMPTY = "empty"
    APPLE = "apple"
    HEAD = "head"
    BODY = "body"


GLYPHS: dict[Glyph, str] = {
    Glyph.EMPTY: EMPTY_GLYPH,
    Glyph.APPLE: APPLE_GLYPH,
    Glyph.HEAD: SNAKE_GLYPH,
    Glyph.BODY: SNAKE_GLYPH,
}


@dataclass(frozen=True)
class MenuSnapshot:
    """Read-only view of the start menu."""

    title: str = "Snake - Menu"
    lines: tuple[str, ...] = (
        "Welcome to Snake (Terminal Edition)",
        "",
        "Press Enter to start",
        "Press Q to quit",
    )


def board_cells(snapshot: SessionSnapshot) -> list[list[Glyph]]:
    """Classify every cell of the board, row by row.

    The apple wins over a snake segment if both claim the same cell, which
    can only happen with the fallback apple on a crowded board.
    """
    head = snapshot.head
    body = set(snapshot.snake[1:])
    rows: list[list[Glyph]] = []
    for y in range(snapshot.height):
        row: list[Glyph] = []
        for x in range(snapshot.width):
            cell = (x, y)
            if cell == snapshot.apple:
                row.append(Glyph.APPLE)
            elif cell == head:
                row.append(Glyph.HEAD)
            elif cell in body:
                row.append(Glyph.BODY)
            else:
                row.append(Glyph.EMPTY)
        rows.append(row)
    return rows


def centered(text: str, width: int) -> int:
    """Column offset that centres *text* in *width* columns (never negative)."""
    return max(0, (width - len(text)) // 2)
