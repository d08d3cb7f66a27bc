"""
Vanishing TicTacToe
===================
TicTacToe where each side keeps at most three marks on the board:
placing a fourth removes that side's oldest mark, which is flagged
one move before it vanishes.

Handles game state, rules, win detection and the AI opponent.
"""

from .config import GameConfig
from .game_state import Board, GameState, GameStatus, InvalidMoveError, Mark, MoveOutcome, Turn
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker, WinResult
from .ai_player import AIPlayer
from .engine import EngineSnapshot, TurnEngine

__version__ = "1.0.0"
