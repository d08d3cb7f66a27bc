"""
AI player for Vanishing TicTacToe.
A greedy one-ply bot: win if it can, block if it must, otherwise play randomly.
"""

import logging
from typing import Optional

import numpy as np

from .config import GameConfig
from .game_state import Board, Mark
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class AIPlayer:
    """
    An AI that plays Vanishing TicTacToe with a simple heuristic.

    Priority:
    1. Complete one of its own lines (win)
    2. Complete the human's line before they do (block)
    3. Random empty cell

    If this move pushes out its own oldest mark, the decision is taken on
    the board as it will look after that mark is gone, and the vacated
    cell is not a candidate. It only looks one move ahead.
    """

    def __init__(
        self,
        player: Mark = Mark.OPPONENT,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which side the AI controls (default: OPPONENT)
            rng: Randomness source with numpy's Generator interface.
        """
        self.player = player
        self.rng = rng if rng is not None else np.random.default_rng(GameConfig.RANDOM_SEED)
        self.win_checker = WinChecker()

        # Why the last move was chosen: "win", "block" or "random" (for debugging)
        self.last_reason: Optional[str] = None

    def get_best_move(self, board: Board, excluded: Optional[int] = None) -> Optional[int]:
        """
        Choose a cell for this move.

        Args:
            board: Current board. Not modified.
            excluded: Cell this side is vacating on this move. Defaults to
                its pending eviction on `board`.

        Returns:
            Cell index, or None if there is nowhere legal to play.
        """
        self.last_reason = None
        evicted = excluded if excluded is not None else board.pending_eviction(self.player)
        marks = board.board_after_eviction(self.player)

        candidates = [
            i for i, mark in enumerate(marks)
            if mark is Mark.EMPTY and i != evicted
        ]
        if not candidates:
            logger.info("AI has no legal cell (vacating %s)", evicted)
            return None

        move = self.win_checker.find_completing_cell(marks, self.player, candidates)
        if move is not None:
            self.last_reason = "win"
        else:
            move = self.win_checker.find_completing_cell(
                marks, self.player.opposite(), candidates
            )
            if move is not None:
                self.last_reason = "block"
            else:
                move = int(self.rng.choice(candidates))
                self.last_reason = "random"

        logger.debug(
            "AI picks %d (%s) from %s, vacating %s",
            move, self.last_reason, candidates, evicted
        )
        return move
