"""purechess: a two-player chess rules engine with PGN import/export."""

__version__ = "0.1.0"
