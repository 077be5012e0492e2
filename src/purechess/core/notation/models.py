"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ParsedPgn:
    """Structured PGN payload used by the game import path."""

    headers: dict[str, str]
    sans: list[str] = field(default_factory=list)
    result_token: str = "*"
