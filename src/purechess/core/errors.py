"""Error taxonomy shared by the core and game layers."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every recoverable engine error."""


class InvalidMoveError(ChessError, ValueError):
    """A move request was rejected; the game state is unchanged."""


class PGNParseError(ChessError, ValueError):
    """PGN text could not be parsed or replayed."""

    def __init__(
        self, message: str, *, line: int | None = None, token: str | None = None
    ) -> None:
        location = f" at line {line}" if line is not None else ""
        super().__init__(f"Error parsing PGN{location}: {message}")
        self.line = line
        self.token = token


class StorageError(ChessError):
    """Persisted game state could not be written or read."""
