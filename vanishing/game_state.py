"""
Game state management for Vanishing TicTacToe.
Tracks the board, the per-side move queues and whose turn it is.

Each side may only keep MAX_MARKS marks on the board. Placing one more
first removes that side's oldest mark (FIFO), so every side's queue is a
sliding window over its last few moves.
"""

import logging
import operator
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple

from .config import GameConfig

logger = logging.getLogger(__name__)


class Mark(Enum):
    """What a cell can hold. PLAYER and OPPONENT double as the two sides."""
    EMPTY = " "
    PLAYER = GameConfig.PLAYER_SYMBOL
    OPPONENT = GameConfig.OPPONENT_SYMBOL

    def opposite(self) -> "Mark":
        """Get the other side (EMPTY stays EMPTY)."""
        if self == Mark.PLAYER:
            return Mark.OPPONENT
        if self == Mark.OPPONENT:
            return Mark.PLAYER
        return Mark.EMPTY


SIDES = (Mark.PLAYER, Mark.OPPONENT)


class Turn(Enum):
    """Whose move it is."""
    PLAYER_TURN = "player"
    OPPONENT_TURN = "opponent"

    @property
    def side(self) -> Mark:
        """The side that holds this turn."""
        return Mark.PLAYER if self == Turn.PLAYER_TURN else Mark.OPPONENT

    @staticmethod
    def of(side: Mark) -> "Turn":
        """The turn belonging to a side."""
        return Turn.PLAYER_TURN if side == Mark.PLAYER else Turn.OPPONENT_TURN


class GameStatus(Enum):
    """Game result. WON is terminal until the next reset."""
    IN_PROGRESS = "in_progress"
    WON = "won"


class InvalidMoveError(ValueError):
    """
    A move request was rejected.

    Raised for an occupied cell, an out-of-range index, a move out of turn
    or a move after the game has ended. Nothing is changed when it is raised.
    """


@dataclass(frozen=True)
class MoveOutcome:
    """What a single placement did to the board."""
    side: Mark
    placed: int
    evicted: Optional[int] = None


class Board:
    """
    The 3x3 board plus one FIFO move queue per side.

    Invariants:
    - each queue holds at most max_marks cells
    - every cell in a side's queue holds that side's mark, and vice versa
    - a cell is in at most one queue, at most once
    """

    def __init__(self, max_marks: int = GameConfig.MAX_MARKS):
        self.max_marks = max_marks
        self.cells: List[Mark] = [Mark.EMPTY] * GameConfig.CELL_COUNT
        self.queues: Dict[Mark, Deque[int]] = {side: deque() for side in SIDES}

    def _check_cell(self, cell: int) -> int:
        """Normalise any integer type (numpy included) to a plain in-range int."""
        if isinstance(cell, bool):
            raise InvalidMoveError(f"Cell {cell!r} is not an integer index")
        try:
            cell = operator.index(cell)
        except TypeError:
            raise InvalidMoveError(f"Cell {cell!r} is not an integer index") from None
        if not 0 <= cell < GameConfig.CELL_COUNT:
            raise InvalidMoveError(
                f"Invalid cell {cell}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )
        return cell

    def _queue(self, side: Mark) -> Deque[int]:
        if side not in self.queues:
            raise InvalidMoveError(f"{side} is not a side")
        return self.queues[side]

    def is_empty(self, cell: int) -> bool:
        """True if nothing is on the cell."""
        cell = self._check_cell(cell)
        return self.cells[cell] is Mark.EMPTY

    def moves(self, side: Mark) -> Tuple[int, ...]:
        """A side's occupied cells, oldest first."""
        return tuple(self._queue(side))

    def pending_eviction(self, side: Mark) -> Optional[int]:
        """
        The cell this side loses on its next placement.

        Only set once the side is at capacity, so the warning shows up as
        soon as the last allowed mark is placed.
        """
        queue = self._queue(side)
        if len(queue) >= self.max_marks:
            return queue[0]
        return None

    def apply_move(self, side: Mark, cell: int) -> MoveOutcome:
        """
        Place a mark for a side, evicting its oldest mark first if full.

        Args:
            side: Mark.PLAYER or Mark.OPPONENT.
            cell: Target cell (0-8), must be empty.

        Returns:
            MoveOutcome with the placed cell and the evicted one (if any).

        Raises:
            InvalidMoveError: cell out of range or occupied. Nothing changes.
        """
        queue = self._queue(side)
        cell = self._check_cell(cell)
        if not self.is_empty(cell):
            raise InvalidMoveError(
                f"Cell {cell} is already occupied by {self.cells[cell].value}"
            )

        evicted = None
        if len(queue) >= self.max_marks:
            evicted = queue.popleft()
            self.cells[evicted] = Mark.EMPTY

        self.cells[cell] = side
        queue.append(cell)

        logger.debug("%s placed at %d (evicted %s)", side.name, cell, evicted)
        return MoveOutcome(side=side, placed=cell, evicted=evicted)

    def empty_cells(self, excluding: Optional[int] = None) -> List[int]:
        """All empty cells in index order, minus an optional excluded cell."""
        return [
            i for i, mark in enumerate(self.cells)
            if mark is Mark.EMPTY and i != excluding
        ]

    def board_after_eviction(self, side: Mark) -> List[Mark]:
        """The marks as they will look once this side's pending eviction happens."""
        marks = list(self.cells)
        evicted = self.pending_eviction(side)
        if evicted is not None:
            marks[evicted] = Mark.EMPTY
        return marks

    def reset(self) -> None:
        """Clear the board and both queues."""
        self.cells = [Mark.EMPTY] * GameConfig.CELL_COUNT
        for queue in self.queues.values():
            queue.clear()

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board(self.max_marks)
        new_board.cells = list(self.cells)
        new_board.queues = {side: deque(q) for side, q in self.queues.items()}
        return new_board

    def render(self) -> str:
        """
        Draw the board as text.

        Empty cells show their 1-9 number, marks about to vanish are
        shown in lower case.
        """
        doomed = {self.pending_eviction(side) for side in SIDES}
        size = GameConfig.BOARD_SIZE
        separator = "+---" * size + "+"
        lines = [separator]
        for row in range(size):
            row_str = "|"
            for col in range(size):
                cell = row * size + col
                mark = self.cells[cell]
                if mark is Mark.EMPTY:
                    text = str(cell + 1)
                elif cell in doomed:
                    text = mark.value.lower()
                else:
                    text = mark.value
                row_str += f" {text} |"
            lines.append(row_str)
            lines.append(separator)
        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print(self.render())


@dataclass
class GameState:
    """
    The complete state of one game, owned by the turn engine.

    Tracks:
    - The board and move queues
    - Whose turn it is (None until the first mover is drawn)
    - Game result (won / draw / opponent stalemate)
    - The opponent's transient last-evicted cell
    - The reset generation
    """

    board: Board = field(default_factory=Board)

    turn: Optional[Turn] = None

    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[Mark] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    is_draw: bool = False
    stalemate: bool = False

    # Cell the opponent is vacating during its current decision
    last_evicted: Optional[int] = None

    # Last applied move, for the presentation layer to animate
    last_move: Optional[MoveOutcome] = None

    generation: int = 0

    @property
    def is_game_over(self) -> bool:
        """True once no further move will be accepted until reset."""
        return self.status == GameStatus.WON or self.is_draw or self.stalemate

    def clear(self) -> None:
        """Back to a fresh, unstarted game. Bumps the generation."""
        self.board.reset()
        self.turn = None
        self.status = GameStatus.IN_PROGRESS
        self.winner = None
        self.winning_line = None
        self.is_draw = False
        self.stalemate = False
        self.last_evicted = None
        self.last_move = None
        self.generation += 1
