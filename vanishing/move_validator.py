"""
Move validator for Vanishing TicTacToe.
Validates that move requests follow the rules before anything is touched.
"""

import operator
from dataclasses import dataclass
from typing import List, Optional

from .config import GameConfig
from .game_state import GameState, GameStatus, Mark, Turn


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Vanishing TicTacToe moves.

    Rules:
    1. The game must have started and must not be over
    2. The side must hold the turn
    3. The cell must be an integer 0-8
    4. The cell must be empty
    """

    def validate_move(
        self,
        game_state: GameState,
        side: Mark,
        cell: int
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            side: Side asking to move.
            cell: Cell to place the mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        turn_check = self.validate_turn(game_state, side)
        if not turn_check.is_valid:
            return turn_check

        bad_index = ValidationResult(
            is_valid=False,
            error_message=f"Cell {cell!r} is not an integer index."
        )
        if isinstance(cell, bool):
            return bad_index
        try:
            cell = operator.index(cell)
        except TypeError:
            return bad_index

        if not 0 <= cell < GameConfig.CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {cell}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )

        occupant = game_state.board.cells[cell]
        if occupant is not Mark.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {cell} is already occupied by {occupant.value}"
            )

        return ValidationResult(is_valid=True)

    def validate_turn(self, game_state: GameState, side: Mark) -> ValidationResult:
        """
        Check that a side may act at all, regardless of the target cell.

        Args:
            game_state: Current game state.
            side: Side asking to move.

        Returns:
            ValidationResult.
        """
        if game_state.status == GameStatus.WON:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if game_state.is_draw:
            return ValidationResult(
                is_valid=False,
                error_message="Game ended in a draw."
            )

        if game_state.stalemate:
            return ValidationResult(
                is_valid=False,
                error_message="Game is stuck: the opponent had nowhere to move."
            )

        if game_state.turn is None:
            return ValidationResult(
                is_valid=False,
                error_message="Game has not started yet."
            )

        if side not in (Mark.PLAYER, Mark.OPPONENT):
            return ValidationResult(
                is_valid=False,
                error_message=f"{side} is not a side."
            )

        if game_state.turn != Turn.of(side):
            return ValidationResult(
                is_valid=False,
                error_message=f"It's not {side.name.lower()}'s turn!"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all cells the side to move may play.

        Args:
            game_state: Current game state.

        Returns:
            List of cell indices (empty if the game is not running).
        """
        if game_state.is_game_over or game_state.turn is None:
            return []
        return game_state.board.empty_cells()
