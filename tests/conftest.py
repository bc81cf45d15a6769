"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, Coordinate, Field, FieldConfig, Session


# ============================================================================
# Test Doubles
# ============================================================================

class FixedMines:
    """Random source whose ``sample`` returns a fixed list of mines."""

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        self.mines = [Coordinate(*mine) for mine in mines]
        self.population: List[Coordinate] = []

    def sample(self, population, k):
        self.population = list(population)
        assert k == len(self.mines)
        for mine in self.mines:
            assert mine in self.population
        return list(self.mines)


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTimer:
    """One-shot timer that only fires when the test calls ``fire``."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.function()


class TimerFactory:
    """Records every timer a ticker creates."""

    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]

    def fire_pending(self) -> None:
        for timer in self.pending:
            timer.fire()
            timer.cancelled = True


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def make_field() -> Callable[..., Field]:
    """Build a field with mines at the given positions."""

    def _make(width: int, height: int, mines: Iterable[Tuple[int, int]] = ()) -> Field:
        mines = list(mines)
        field = Field(FieldConfig(width, height, len(mines)), rng=FixedMines(mines))
        field.place_mines()
        return field

    return _make


@pytest.fixture
def easy_field() -> Field:
    """Create a 9x9 field with 10 randomly placed mines."""
    field = Field(FieldConfig(9, 9, 10), rng=random.Random(1234))
    field.place_mines()
    return field


@pytest.fixture
def corner_field(make_field) -> Field:
    """
    5x5 field with a single mine in the bottom-right corner.

    Everything except the mine and its three neighbors is an empty region.
    """
    return make_field(5, 5, [(4, 4)])


@pytest.fixture
def unplaced_field() -> Field:
    """Create a 9x9 field before mine placement."""
    return Field(FieldConfig(9, 9, 10), rng=random.Random(7))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timers() -> TimerFactory:
    return TimerFactory()


@pytest.fixture
def make_session(clock: FakeClock, timers: TimerFactory) -> Callable[..., Session]:
    """Build a session on a hand-driven clock and timer."""

    def _make(safe_start: bool = True, rng=None) -> Session:
        return Session(
            safe_start=safe_start,
            rng=rng or random.Random(42),
            clock=clock,
            timer_factory=timers,
        )

    return _make


@pytest.fixture
def rigged_session(make_session) -> Callable[..., Session]:
    """Start an eager-placement game with mines at the given positions."""

    def _make(width: int, height: int, mines: Iterable[Tuple[int, int]]) -> Session:
        mines = list(mines)
        session = make_session(safe_start=False, rng=FixedMines(mines))
        session.new_game(width, height, len(mines))
        return session

    return _make
