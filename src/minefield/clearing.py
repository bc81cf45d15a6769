"""
Clearing engine for the minefield.

Reveals a cell and, when it has no neighboring mines, floods outward
through the connected empty region and its numbered border.
"""
import logging
from typing import List

from .cell import FLAGGED, ChangedCell, Coordinate
from .field import Field

logger = logging.getLogger(__name__)


def clear_region(field: Field, start: Coordinate) -> List[ChangedCell]:
    """
    Clear a cell and cascade through empty neighbors.

    The walk uses an explicit stack, so a region spanning the whole field
    does not grow the call stack. A cell's ``cleared`` flag doubles as the
    visited marker: it is set before the cell is pushed, so no cell is
    pushed twice. Flagged cells are boundaries and stay untouched.

    Args:
        field: Field with mines already placed.
        start: Position to clear.

    Returns:
        The cells whose display must change, ``start`` first. Empty if
        ``start`` is a mine. A flagged ``start`` is reported once with the
        FLAGGED sentinel and nothing is cleared.
    """
    start = Coordinate(*start)
    cell = field[start]

    if cell.flagged:
        return [ChangedCell(start, FLAGGED)]
    if not field.clear(start):
        return []

    changed = [ChangedCell(start, cell.neighboring_mines)]
    if cell.neighboring_mines != 0:
        return changed

    stack = [start]
    while stack:
        current = stack.pop()
        for neighbor in field.neighbors(current):
            neighbor_cell = field[neighbor]
            if neighbor_cell.cleared or neighbor_cell.flagged:
                continue
            field.clear(neighbor)
            changed.append(ChangedCell(neighbor, neighbor_cell.neighboring_mines))
            if neighbor_cell.neighboring_mines == 0:
                stack.append(neighbor)

    logger.debug("Cascade from %s cleared %d cells", tuple(start), len(changed))
    return changed
