"""
Minefield engine.

Provides the minesweeper core: cell state, the minefield grid, the
flood-fill clearing engine, and the game session state machine.
"""
from .cell import FLAGGED, Cell, ChangedCell, Coordinate
from .errors import ConfigurationError, PreconditionViolation
from .field import EASY, HARD, MEDIUM, PRESETS, Field, FieldConfig
from .clearing import clear_region
from .ticker import Ticker
from .session import ClearResult, FlagResult, GameState, Session

__all__ = [
    "FLAGGED",
    "Cell",
    "ChangedCell",
    "Coordinate",
    "ConfigurationError",
    "PreconditionViolation",
    "EASY",
    "MEDIUM",
    "HARD",
    "PRESETS",
    "Field",
    "FieldConfig",
    "clear_region",
    "Ticker",
    "ClearResult",
    "FlagResult",
    "GameState",
    "Session",
]
