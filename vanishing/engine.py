"""
Turn engine for Vanishing TicTacToe.

Ties together:
- Game state (board, move queues, turn, result)
- Move validation
- Win detection after every move
- The AI opponent

The engine has no timers. A shell calls submit_player_move() for the
human and then, whenever it likes, compute_and_apply_opponent_move()
for the bot. Each snapshot carries the reset generation; passing it back
with the opponent request makes a reset in between discard that request.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import (
    Board, GameState, GameStatus, InvalidMoveError, Mark, MoveOutcome, Turn
)
from .move_validator import MoveValidator, ValidationResult
from .win_checker import Line, WinChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Everything the presentation layer needs after a transition."""
    board: Tuple[Mark, ...]
    turn: Optional[Turn]
    status: GameStatus
    winner: Optional[Mark]
    winning_line: Optional[Line]
    player_pending: Optional[int]
    opponent_pending: Optional[int]
    last_move: Optional[MoveOutcome]
    is_draw: bool
    stalemate: bool
    generation: int

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.WON or self.is_draw or self.stalemate

    def pending_eviction(self, side: Mark) -> Optional[int]:
        """The flagged cell of a side."""
        return self.player_pending if side == Mark.PLAYER else self.opponent_pending


class TurnEngine:
    """
    Runs one game of Vanishing TicTacToe between a human and the AI.

    Game flow:
    1. start() flips a coin for the first mover
    2. Human moves with submit_player_move(cell)
    3. Bot answers with compute_and_apply_opponent_move()
    4. Repeat until someone wins, then reset() or start() again
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        max_marks: int = GameConfig.MAX_MARKS
    ):
        """
        Initialize the engine.

        Args:
            rng: Randomness source for the coin flip and the AI's random
                fallback (numpy Generator interface: integers, choice).
            max_marks: How many marks each side may keep on the board.
        """
        self.rng = rng if rng is not None else np.random.default_rng(GameConfig.RANDOM_SEED)
        self.state = GameState(board=Board(max_marks))
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.ai = AIPlayer(Mark.OPPONENT, rng=self.rng)

        # (position key, cell, reason) of the last AI decision
        self._planned: Optional[tuple] = None

    @property
    def board(self) -> Board:
        return self.state.board

    def reset(self) -> EngineSnapshot:
        """
        Clear everything. The turn stays unset until start().

        Always accepted. Any opponent move requested with an older
        generation is rejected afterwards.
        """
        self.state.clear()
        self._planned = None
        logger.info("Game reset (generation %d)", self.state.generation)
        return self.snapshot()

    def start(self) -> EngineSnapshot:
        """Reset and flip a coin for who moves first."""
        self.reset()
        player_starts = int(self.rng.integers(0, 2)) == 0
        self.state.turn = Turn.PLAYER_TURN if player_starts else Turn.OPPONENT_TURN
        logger.info("New game: %s moves first", self.state.turn.side.name)
        return self.snapshot()

    def submit_player_move(self, cell: int) -> EngineSnapshot:
        """
        Place the human's mark.

        Args:
            cell: Target cell (0-8).

        Returns:
            Snapshot after the move. If the game goes on, it is now the
            opponent's turn.

        Raises:
            InvalidMoveError: Move rejected, nothing changed.
        """
        self._raise_if_invalid(self.validator.validate_move(self.state, Mark.PLAYER, cell))
        self._apply(Mark.PLAYER, cell)
        return self.snapshot()

    def compute_opponent_move(self) -> Optional[int]:
        """
        The cell the AI would play now, without playing it.

        The decision is kept until the position changes, so a following
        compute_and_apply_opponent_move() plays this same cell.
        """
        return self._plan_opponent_move(self.board.pending_eviction(Mark.OPPONENT))

    def compute_and_apply_opponent_move(self, generation: Optional[int] = None) -> EngineSnapshot:
        """
        Let the AI take its turn.

        Args:
            generation: Generation seen when the move was scheduled. If a
                reset happened since, the request is rejected.

        Returns:
            Snapshot after the move. If the AI had no legal cell, no mark
            is placed, the stalemate flag is set and the turn goes back
            to the human.

        Raises:
            InvalidMoveError: Not the opponent's turn, game over or stale.
        """
        if generation is not None and generation != self.state.generation:
            self._raise_if_invalid(ValidationResult(
                is_valid=False,
                error_message=(
                    f"Stale opponent move (generation {generation}, "
                    f"now {self.state.generation})"
                )
            ))
        self._raise_if_invalid(self.validator.validate_turn(self.state, Mark.OPPONENT))

        self.state.last_evicted = self.board.pending_eviction(Mark.OPPONENT)
        cell = self._plan_opponent_move(self.state.last_evicted)
        self._planned = None

        if cell is None:
            logger.info("Opponent has no legal cell, turn passes back")
            self.state.last_evicted = None
            self.state.stalemate = True
            self.state.last_move = None
            self.state.turn = Turn.PLAYER_TURN
            return self.snapshot()

        self._apply(Mark.OPPONENT, cell)
        self.state.last_evicted = None
        return self.snapshot()

    def _position_key(self) -> tuple:
        board = self.board
        return (
            self.state.generation,
            tuple(board.cells),
            board.moves(Mark.PLAYER),
            board.moves(Mark.OPPONENT),
        )

    def _plan_opponent_move(self, vacated: Optional[int]) -> Optional[int]:
        """Ask the AI once per position; later calls reuse its answer."""
        key = self._position_key()
        if self._planned is not None and self._planned[0] == key:
            _, cell, reason = self._planned
            self.ai.last_reason = reason
            return cell

        cell = self.ai.get_best_move(self.board, excluded=vacated)
        self._planned = (key, cell, self.ai.last_reason)
        return cell

    def snapshot(self) -> EngineSnapshot:
        """Current state for the presentation layer."""
        state = self.state
        return EngineSnapshot(
            board=tuple(state.board.cells),
            turn=state.turn,
            status=state.status,
            winner=state.winner,
            winning_line=state.winning_line,
            player_pending=state.board.pending_eviction(Mark.PLAYER),
            opponent_pending=state.board.pending_eviction(Mark.OPPONENT),
            last_move=state.last_move,
            is_draw=state.is_draw,
            stalemate=state.stalemate,
            generation=state.generation,
        )

    def _apply(self, side: Mark, cell: int) -> None:
        """Place, check the result, pass the turn."""
        state = self.state
        state.last_move = state.board.apply_move(side, cell)

        result = self.win_checker.check_win(state.board.cells)
        if result is not None:
            state.status = GameStatus.WON
            state.winner = result.winner
            state.winning_line = result.line
            logger.info("%s wins on %s", result.winner.name, result.line)
            return

        if self.win_checker.is_draw(state.board.cells):
            state.is_draw = True
            logger.info("Board full, draw")
            return

        state.turn = Turn.of(side.opposite())

    def _raise_if_invalid(self, result: ValidationResult) -> None:
        if not result.is_valid:
            logger.info("Move rejected: %s", result.error_message)
            raise InvalidMoveError(result.error_message)
