"""
Cell module for the minefield engine.

Holds the per-square state of a minefield along with the small value
types passed between the engine and its display layer.
"""
from dataclasses import dataclass
from typing import NamedTuple


# ============================================================================
# Constants
# ============================================================================

# Reported in place of a neighbor count for a cell that carries a flag.
FLAGGED = -1


# ============================================================================
# Value Types
# ============================================================================

class Coordinate(NamedTuple):
    """0-based (x, y) position: x is the column, y is the row."""

    x: int
    y: int


class ChangedCell(NamedTuple):
    """
    A cell whose visible state changed after a clear.

    Attributes:
        coordinate: Position of the cell.
        neighboring_mines: Neighbor count to display, or FLAGGED when the
            cell is flagged and its display must be left alone.
    """

    coordinate: Coordinate
    neighboring_mines: int


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single square of the minefield.

    Attributes:
        is_mine: Whether this cell contains a mine.
        neighboring_mines: Count of mines in neighboring cells (0-8).
        flagged: Whether the player has marked this cell.
        cleared: Whether this cell has been revealed. Never reset.
    """

    is_mine: bool = False
    neighboring_mines: int = 0
    flagged: bool = False
    cleared: bool = False

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither cleared nor flagged."""
        return not self.cleared and not self.flagged

    def to_observation(self) -> int:
        """
        Convert cell to the value used in observation arrays.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Cleared cell with neighboring mine count
            9: Cleared mine (game over state)
        """
        if self.flagged:
            return -2
        if not self.cleared:
            return -1
        if self.is_mine:
            return 9
        return self.neighboring_mines
