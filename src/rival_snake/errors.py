"""Exception types raised by the game core."""

from __future__ import annotations


class RivalSnakeError(Exception):
    """Base class for all game-core errors."""


class ConfigurationError(RivalSnakeError, ValueError):
    """Raised when a session is configured with invalid parameters."""


class FoodPlacementError(RivalSnakeError, RuntimeError):
    """Raised when no free cell is left for food."""
