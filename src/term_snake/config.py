"""Tuning constants for game speed, board size, and input polling."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Gameplay and loop timing configuration.

    Supports JSON serialization so a tuned setup can be shared.
    """

    # Tick timing (milliseconds)
    base_tick_ms: int = 160
    tick_reduction_ms: int = 10
    min_tick_ms: int = 40

    # Board
    min_width: int = 10
    min_height: int = 5
    initial_length: int = 3

    # Scoring
    apples_per_level: int = 5
    max_apple_attempts: int = 1000

    # Input polling (milliseconds)
    play_poll_ms: int = 16
    idle_poll_ms: int = 200

    def __post_init__(self) -> None:
        for name in (
            "base_tick_ms", "min_tick_ms", "min_width", "min_height",
            "initial_length", "apples_per_level", "max_apple_attempts",
            "play_poll_ms", "idle_poll_ms",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1.")
        if self.tick_reduction_ms < 0:
            raise ValueError("tick_reduction_ms must be >= 0.")
        if self.min_tick_ms > self.base_tick_ms:
            raise ValueError("min_tick_ms must not exceed base_tick_ms.")
        if self.initial_length > self.min_width // 2:
            raise ValueError(
                "initial_length must fit in half of min_width "
                "so the starting snake stays on the board.",
            )

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file. Missing keys keep their defaults."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
