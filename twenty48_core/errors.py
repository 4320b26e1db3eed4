from __future__ import annotations


class GameOver(RuntimeError):
    """Raised when a tile must be spawned but no cell is empty."""


class MalformedToken(ValueError):
    """Raised when a token cannot be decoded into a well-formed board."""
