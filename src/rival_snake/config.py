"""Session configuration for the game engine."""

from __future__ import annotations

import enum
import json
import logging
import math
from dataclasses import asdict, dataclass
from pathlib import Path

from rival_snake.errors import ConfigurationError
from rival_snake.food import DEFAULT_MAX_ATTEMPTS
from rival_snake.grid import validate_grid_size

logger = logging.getLogger(__name__)


class GameMode(str, enum.Enum):
    """Leaderboard bucket a finished session is recorded under."""

    SOLO = "solo"
    AI = "ai"
    AI_REVIVE = "ai_revive"


@dataclass(frozen=True)
class GameConfig:
    """Parameters for one engine instance.

    A single engine covers every variant: ``has_opponent=False`` is solo
    play, and ``revive_enabled`` brings a dead AI back after
    ``revive_delay_ms``.
    """

    grid_size: int = 15
    has_opponent: bool = True
    revive_enabled: bool = False
    tick_rate_ms: int = 200
    revive_delay_ms: int = 1000
    food_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    seed: int | None = None

    def __post_init__(self) -> None:
        validate_grid_size(self.grid_size)
        if self.tick_rate_ms <= 0:
            raise ConfigurationError("tick_rate_ms must be positive.")
        if self.revive_delay_ms < 0:
            raise ConfigurationError("revive_delay_ms must be >= 0.")
        if self.food_max_attempts < 1:
            raise ConfigurationError("food_max_attempts must be at least 1.")
        if self.revive_enabled and not self.has_opponent:
            raise ConfigurationError("revive_enabled requires has_opponent.")

    @property
    def mode(self) -> GameMode:
        if not self.has_opponent:
            return GameMode.SOLO
        return GameMode.AI_REVIVE if self.revive_enabled else GameMode.AI

    @property
    def revive_delay_ticks(self) -> int:
        """Ticks a dead AI waits before respawning (at least one)."""
        return max(1, math.ceil(self.revive_delay_ms / self.tick_rate_ms))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        return cls(**raw)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
