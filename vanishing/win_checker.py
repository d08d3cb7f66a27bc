"""
Win checker for Vanishing TicTacToe.
Checks if a side has three in a row, and finds lines that are one mark short.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .game_state import Mark

Line = Tuple[int, int, int]


@dataclass(frozen=True)
class WinResult:
    """Who won and along which line."""
    winner: Mark
    line: Line


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 marks of the same side in a row
    (horizontally, vertically, or diagonally).
    The order of WINNING_LINES decides which line is reported
    when more than one is complete.
    """

    # All possible winning lines, as cell indices (row-major)
    WINNING_LINES: Tuple[Line, ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def check_win(self, board: Sequence[Mark]) -> Optional[WinResult]:
        """
        Check the board for a completed line.

        Args:
            board: The 9 marks, row-major.

        Returns:
            WinResult for the first complete line, or None.
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(board, line)
            if winner is not None:
                return WinResult(winner=winner, line=line)
        return None

    def check_winner(self, board: Sequence[Mark]) -> Optional[Mark]:
        """The winning side, or None."""
        result = self.check_win(board)
        return result.winner if result else None

    def get_winning_line(self, board: Sequence[Mark]) -> Optional[Line]:
        """The first completed line, or None."""
        result = self.check_win(board)
        return result.line if result else None

    def _check_line(self, board: Sequence[Mark], line: Line) -> Optional[Mark]:
        a, b, c = (board[i] for i in line)
        if a is not Mark.EMPTY and a == b == c:
            return a
        return None

    def is_draw(self, board: Sequence[Mark]) -> bool:
        """
        Full board and nobody has won.

        With three marks per side the board never fills up, so this only
        triggers when MAX_MARKS is raised.
        """
        if any(mark is Mark.EMPTY for mark in board):
            return False
        return self.check_win(board) is None

    def find_completing_cell(
        self,
        board: Sequence[Mark],
        mark: Mark,
        eligible: Iterable[int]
    ) -> Optional[int]:
        """
        Find a cell that would give `mark` three in a row.

        Scans lines in order and returns the empty cell of the first line
        holding two `mark` cells and one empty cell that is in `eligible`.

        Args:
            board: The 9 marks.
            mark: Side whose lines to complete.
            eligible: Cells that may be played.

        Returns:
            The cell index, or None.
        """
        allowed = set(eligible)
        for line in self.WINNING_LINES:
            marks: List[Mark] = [board[i] for i in line]
            if marks.count(mark) != 2 or marks.count(Mark.EMPTY) != 1:
                continue
            cell = line[marks.index(Mark.EMPTY)]
            if cell in allowed:
                return cell
        return None
