"""
Game session for the minefield engine.

Drives one playthrough at a time: builds the field, defers mine placement
to the first clear when safe start is on, runs the clearing engine, and
owns the win/loss state machine and the elapsed-time ticker.
"""
import logging
import random
import threading
import time
from enum import Enum, auto
from typing import Callable, List, NamedTuple, Optional, Union

from .cell import ChangedCell, Coordinate
from .clearing import clear_region
from .errors import PreconditionViolation
from .field import PRESETS, Field, FieldConfig
from .ticker import Ticker

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a session."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class ClearResult(NamedTuple):
    """Outcome of a clear: False success means a mine went off."""

    success: bool
    changed: List[ChangedCell]


class FlagResult(NamedTuple):
    """Outcome of a flag toggle."""

    now_flagged: bool
    flags_left: int


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    One player's game, from new game to won or lost.

    Sessions share nothing, so several can exist side by side. All calls
    are expected from a single control thread; only tick notifications
    arrive from the ticker's timer.

    Args:
        safe_start: Defer mine placement to the first clear and keep that
            cell and its neighbors mine-free.
        rng: Random source for mine placement.
        clock: Monotonic clock for elapsed time.
        timer_factory: One-shot timer factory for the ticker.
    """

    def __init__(
        self,
        safe_start: bool = True,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.safe_start = safe_start
        self.rng = rng or random.Random()
        self.on_game_end: List[Callable[[bool], None]] = []
        self.on_tick: List[Callable[[int], None]] = []

        self._field: Optional[Field] = None
        self._state = GameState.NOT_STARTED
        self._ticker = Ticker(
            self._notify_tick, clock=clock, timer_factory=timer_factory
        )

    # ========================================================================
    # Game Lifecycle
    # ========================================================================

    def new_game(
        self,
        config: Union[FieldConfig, str, int],
        height: Optional[int] = None,
        mine_count: Optional[int] = None,
    ) -> None:
        """
        Start a new game, discarding any current one.

        Accepts ``new_game(width, height, mine_count)``, a FieldConfig, or a
        preset name such as ``"easy"``.

        Raises:
            ConfigurationError: The shape or mine count is invalid.
            KeyError: Unknown preset name.
        """
        config = self._resolve_config(config, height, mine_count)

        self._ticker.stop()
        self._field = Field(config, rng=self.rng)
        if not self.safe_start:
            self._field.place_mines()

        self._state = GameState.IN_PROGRESS
        self._ticker.start()
        logger.info(
            "New game: %dx%d with %d mines (safe start %s)",
            config.width, config.height, config.mine_count,
            "on" if self.safe_start else "off",
        )

    def restart(self) -> None:
        """Start a new game with the current game's parameters."""
        if self._field is None:
            raise PreconditionViolation("No game has been started")
        self.new_game(self._field.config)

    @staticmethod
    def _resolve_config(
        config: Union[FieldConfig, str, int],
        height: Optional[int],
        mine_count: Optional[int],
    ) -> FieldConfig:
        if isinstance(config, FieldConfig):
            return config
        if isinstance(config, str):
            return PRESETS[config.lower()]
        if height is None or mine_count is None:
            raise TypeError("new_game needs width, height and mine_count")
        return FieldConfig(config, height, mine_count)

    def _end_game(self, state: GameState) -> None:
        self._state = state
        self._ticker.stop()
        won = state == GameState.WON
        logger.info(
            "Game %s after %d seconds",
            "won" if won else "lost", self.elapsed_seconds(),
        )
        for listener in self.on_game_end:
            listener(won)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def clear_cell(self, x: int, y: int) -> ClearResult:
        """
        Clear a cell and cascade through empty neighbors.

        The first clear of a safe-start game places the mines around it.

        Returns:
            ClearResult. ``success`` is False when a mine was hit or no game
            is in progress; ``changed`` lists the cells to redraw.

        Raises:
            PreconditionViolation: Coordinate outside the field.
        """
        if self._state != GameState.IN_PROGRESS:
            return ClearResult(False, [])

        coord = Coordinate(x, y)
        cell = self._field[coord]
        if cell.cleared:
            return ClearResult(True, [])

        if not self._field.mines_placed:
            excluded = {coord, *self._field.neighbors(coord)}
            self._field.place_mines(excluded)

        # An empty change list means the cell held a mine.
        changed = clear_region(self._field, coord)
        if not changed:
            self._end_game(GameState.LOST)
            return ClearResult(False, [])

        self._check_win_condition()
        return ClearResult(True, changed)

    def toggle_flag_cell(self, x: int, y: int) -> FlagResult:
        """
        Place or remove a flag.

        Returns:
            FlagResult with the new flag status and the flags left, which
            is the mine count less the flags that sit on mines.

        Raises:
            PreconditionViolation: Coordinate outside the field.
        """
        if self._state != GameState.IN_PROGRESS:
            return FlagResult(False, self.flags_left)

        coord = Coordinate(x, y)
        if self._field[coord].cleared:
            return FlagResult(False, self.flags_left)

        now_flagged = self._field.toggle_flag(coord)
        flags_left = self.flags_left
        self._check_win_condition()
        return FlagResult(now_flagged, flags_left)

    def _check_win_condition(self) -> None:
        """Win once every mine is flagged and every other cell cleared."""
        if self._field.mines_left() == 0 and self._field.cells_left() == 0:
            self._end_game(GameState.WON)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current session state."""
        return self._state

    def session_state(self) -> GameState:
        return self._state

    @property
    def field(self) -> Optional[Field]:
        """The current field, or None before the first game."""
        return self._field

    @property
    def flags_left(self) -> int:
        """Mine count less the flags placed on actual mines."""
        if self._field is None:
            return 0
        return self._field.mines_left()

    def all_mine_coordinates(self) -> List[Coordinate]:
        """
        Positions of every mine, for display after a loss.

        Raises:
            PreconditionViolation: The game has not been lost.
        """
        if self._state != GameState.LOST:
            raise PreconditionViolation(
                "Mine positions are only available after a loss"
            )
        return self._field.mine_coordinates()

    def elapsed_seconds(self) -> int:
        """Whole seconds since the current game started."""
        return self._ticker.elapsed_seconds()

    def _notify_tick(self, elapsed: int) -> None:
        for listener in self.on_tick:
            listener(elapsed)
