"""Term Snake: single-player snake for the terminal."""

from term_snake.app import GameApp, GameOver, Menu, Playing
from term_snake.config import GameConfig
from term_snake.engine import GameSession, SessionSnapshot
from term_snake.grid import Grid
from term_snake.snake import Direction, Point, Snake

__all__ = [
    "Direction",
    "GameApp",
    "GameConfig",
    "GameOver",
    "GameSession",
    "Grid",
    "Menu",
    "Playing",
    "Point",
    "SessionSnapshot",
    "Snake",
]
