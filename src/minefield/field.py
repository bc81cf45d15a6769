"""
Field module for the minefield engine.

Implements the grid of cells with mine placement, neighbor counting,
per-cell clear and flag operations, and aggregate counts.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from .cell import Cell, Coordinate
from .errors import ConfigurationError, PreconditionViolation

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class FieldConfig:
    """
    Shape and mine count of a minefield.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Field dimensions must be positive")
        if self.mine_count < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        if self.mine_count >= self.width * self.height:
            raise ConfigurationError(
                f"Too many mines (max {self.width * self.height - 1})"
            )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height


# Preset difficulty levels
EASY = FieldConfig(9, 9, 10)
MEDIUM = FieldConfig(16, 16, 40)
HARD = FieldConfig(30, 16, 100)

PRESETS: Dict[str, FieldConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


# ============================================================================
# Field Class
# ============================================================================

@dataclass
class Field:
    """
    Minefield grid.

    Cells live in a flat list indexed by ``y * width + x``. Mines are not
    placed on construction; call ``place_mines`` once, optionally with an
    exclusion zone.
    """

    config: FieldConfig = field(default_factory=FieldConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Create the empty grid after dataclass creation."""
        self._cells = [Cell() for _ in range(self.config.size)]

    # ========================================================================
    # Shape (Low-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def mines_placed(self) -> bool:
        """Check if mines have been placed."""
        return self._mines_placed

    def is_valid_position(self, coord: Coordinate) -> bool:
        """Check if position is within field bounds."""
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, coord: Coordinate) -> int:
        """Flat index of a coordinate, failing fast when out of bounds."""
        if not self.is_valid_position(coord):
            raise PreconditionViolation(
                f"{tuple(coord)} is outside the {self.width}x{self.height} field"
            )
        return coord[1] * self.width + coord[0]

    def __getitem__(self, coord: Coordinate) -> Cell:
        return self._cells[self._index(coord)]

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def neighbors(self, coord: Coordinate) -> Iterator[Coordinate]:
        """
        Yield the in-bounds neighbors of a position.

        Args:
            coord: Center position. Must be inside the field.

        Yields:
            Up to 8 coordinates in row-major order, excluding ``coord``.
        """
        self._index(coord)
        x, y = coord
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                neighbor = Coordinate(x + delta_x, y + delta_y)
                if self.is_valid_position(neighbor):
                    yield neighbor

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def place_mines(self, excluded: Iterable[Coordinate] = ()) -> None:
        """
        Place mines randomly, keeping the excluded positions mine-free.

        Args:
            excluded: Positions that must not receive a mine.

        Raises:
            ConfigurationError: The exclusion zone leaves fewer free cells
                than there are mines to place.
            PreconditionViolation: Mines were already placed, or an
                excluded position is outside the field.
        """
        if self._mines_placed:
            raise PreconditionViolation("Mines have already been placed")

        excluded_set = {Coordinate(*coord) for coord in excluded}
        for coord in excluded_set:
            self._index(coord)

        positions = [c for c in self.coordinates() if c not in excluded_set]
        if len(positions) < self.mine_count:
            raise ConfigurationError(
                f"Cannot place {self.mine_count} mines in "
                f"{len(positions)} eligible cells"
            )

        for coord in self.rng.sample(positions, self.mine_count):
            self._set_mine(coord)

        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d field (%d cells excluded)",
            self.mine_count, self.width, self.height, len(excluded_set),
        )

    def _set_mine(self, coord: Coordinate) -> None:
        """Mark a mine and bump the count of each of its neighbors."""
        self[coord].is_mine = True
        for neighbor in self.neighbors(coord):
            self[neighbor].neighboring_mines += 1

    # ========================================================================
    # Cell Actions
    # ========================================================================

    def clear(self, coord: Coordinate) -> bool:
        """
        Clear the cell at a position.

        A flagged cell is protected: nothing changes and the call reports
        success.

        Returns:
            False if the cell holds a mine (detonation), otherwise True.
        """
        cell = self[coord]
        if cell.flagged:
            return True
        cell.cleared = True
        return not cell.is_mine

    def flag(self, coord: Coordinate, value: bool = True) -> bool:
        """
        Place or remove a flag.

        Returns:
            The new flag status. A cleared cell cannot be flagged and
            always returns False.
        """
        cell = self[coord]
        if cell.cleared:
            return False
        cell.flagged = value
        return value

    def toggle_flag(self, coord: Coordinate) -> bool:
        """Flip the flag on a cell and return its new status."""
        return self.flag(coord, not self[coord].flagged)

    # ========================================================================
    # Aggregate Queries
    # ========================================================================

    def flags_placed(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self._cells if cell.flagged)

    def mines_left(self) -> int:
        """Number of mines without a flag on them."""
        flagged_mines = sum(
            1 for cell in self._cells if cell.flagged and cell.is_mine
        )
        return self.mine_count - flagged_mines

    def cells_left(self) -> int:
        """Number of cells that are neither cleared nor flagged."""
        return sum(1 for cell in self._cells if cell.is_hidden)

    def mine_coordinates(self) -> List[Coordinate]:
        """Positions of every mine in row-major order."""
        return [c for c in self.coordinates() if self[c].is_mine]

    def get_cell(self, coord: Coordinate) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(coord):
            return None
        return self[coord]

    def get_observation(self) -> np.ndarray:
        """
        Get field state as a numpy array for display.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = cleared with neighboring count
                9 = cleared mine
        """
        obs = np.array(
            [cell.to_observation() for cell in self._cells], dtype=np.int8
        )
        return obs.reshape(self.height, self.width)
