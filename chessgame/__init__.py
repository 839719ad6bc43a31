"""Chess rules and games, analysis, board geometry and multiplayer helpers."""

__version__ = "0.1.0"