"""
Unit tests for Cell and the small value types.

Tests cell defaults, hidden status, and observation conversion.
"""
import pytest
from minefield import FLAGGED, Cell, ChangedCell, Coordinate


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self, hidden_cell: Cell) -> None:
        """New cell should be neither cleared nor flagged."""
        assert hidden_cell.cleared is False
        assert hidden_cell.flagged is False
        assert hidden_cell.is_hidden is True

    def test_default_cell_has_zero_neighboring_mines(self) -> None:
        """New cell should have 0 neighboring mines by default."""
        assert Cell().neighboring_mines == 0

    def test_mine_cell_creation(self, mine_cell: Cell) -> None:
        """Can create a cell that is a mine."""
        assert mine_cell.is_mine is True

    def test_flagged_cell_is_not_hidden(self) -> None:
        """Flagged cells do not count as hidden."""
        assert Cell(flagged=True).is_hidden is False

    def test_cleared_cell_is_not_hidden(self) -> None:
        """Cleared cells do not count as hidden."""
        assert Cell(cleared=True).is_hidden is False


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1 for observation."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Flagged cell should return -2 for observation."""
        hidden_cell.flagged = True
        assert hidden_cell.to_observation() == -2

    def test_hidden_mine_is_not_revealed(self, mine_cell: Cell) -> None:
        """An uncleared mine looks like any hidden cell."""
        assert mine_cell.to_observation() == -1

    @pytest.mark.parametrize("count", range(0, 9))
    def test_cleared_cell_observation_matches_neighbor_count(
        self, count: int
    ) -> None:
        """Cleared cell returns its neighboring mine count."""
        cell = Cell(neighboring_mines=count, cleared=True)
        assert cell.to_observation() == count

    def test_cleared_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Cleared mine should return 9 for observation."""
        mine_cell.cleared = True
        assert mine_cell.to_observation() == 9


# ============================================================================
# Value Type Tests
# ============================================================================

class TestValueTypes:
    """Test Coordinate and ChangedCell."""

    def test_coordinate_unpacks_as_x_then_y(self) -> None:
        """Coordinate behaves as an (x, y) tuple."""
        x, y = Coordinate(3, 7)
        assert (x, y) == (3, 7)

    def test_coordinate_equals_plain_tuple(self) -> None:
        """Coordinates compare equal to plain tuples."""
        assert Coordinate(1, 2) == (1, 2)
        assert (1, 2) in {Coordinate(1, 2)}

    def test_flagged_sentinel_is_not_a_count(self) -> None:
        """The sentinel cannot collide with a real neighbor count."""
        assert FLAGGED not in range(0, 9)

    def test_changed_cell_fields(self) -> None:
        """ChangedCell exposes coordinate and count."""
        changed = ChangedCell(Coordinate(0, 1), 3)
        assert changed.coordinate == (0, 1)
        assert changed.neighboring_mines == 3
