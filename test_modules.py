"""
Tests for the building blocks: board and move queues, win checker,
move validator.
"""

import numpy as np
import pytest

from vanishing.game_state import Board, GameState, GameStatus, InvalidMoveError, Mark, MoveOutcome, Turn
from vanishing.move_validator import MoveValidator
from vanishing.win_checker import WinChecker

X, O, _ = Mark.PLAYER, Mark.OPPONENT, Mark.EMPTY


def marks(text):
    """'XX_O_____' -> list of marks."""
    lookup = {"X": X, "O": O, "_": _}
    return [lookup[ch] for ch in text]


# ==================== BOARD ====================

def test_new_board_is_empty():
    board = Board()
    assert board.empty_cells() == list(range(9))
    assert all(board.is_empty(i) for i in range(9))
    assert board.pending_eviction(X) is None
    assert board.pending_eviction(O) is None


def test_apply_move_places_without_eviction_below_capacity():
    board = Board()
    outcome = board.apply_move(X, 4)
    assert outcome == MoveOutcome(side=X, placed=4, evicted=None)
    assert board.cells[4] is X
    assert board.moves(X) == (4,)


def test_pending_eviction_shows_as_soon_as_third_mark_lands():
    board = Board()
    board.apply_move(X, 0)
    board.apply_move(X, 4)
    assert board.pending_eviction(X) is None
    board.apply_move(X, 8)
    assert board.pending_eviction(X) == 0
    assert board.pending_eviction(O) is None


def test_fourth_mark_evicts_oldest():
    board = Board()
    for cell in (0, 4, 8):
        board.apply_move(X, cell)
    board.apply_move(O, 2)

    outcome = board.apply_move(X, 6)

    assert outcome.evicted == 0
    assert board.cells[0] is _
    assert board.cells[2] is O
    assert board.moves(X) == (4, 8, 6)
    assert board.pending_eviction(X) == 4


def test_eviction_frees_cell_for_other_side():
    board = Board()
    for cell in (0, 1, 3):
        board.apply_move(X, cell)
    board.apply_move(X, 5)
    assert board.is_empty(0)
    board.apply_move(O, 0)
    assert board.moves(O) == (0,)


def test_apply_move_on_occupied_cell_changes_nothing():
    board = Board()
    board.apply_move(O, 4)
    before = (list(board.cells), board.moves(X), board.moves(O))

    with pytest.raises(InvalidMoveError):
        board.apply_move(X, 4)

    assert (list(board.cells), board.moves(X), board.moves(O)) == before


@pytest.mark.parametrize("cell", [-1, 9, 42, "3", 1.0, True])
def test_apply_move_rejects_bad_index(cell):
    board = Board()
    with pytest.raises(InvalidMoveError):
        board.apply_move(X, cell)
    assert board.empty_cells() == list(range(9))


def test_apply_move_accepts_numpy_integer():
    board = Board()
    outcome = board.apply_move(X, np.int64(4))

    assert outcome == MoveOutcome(side=X, placed=4, evicted=None)
    assert type(outcome.placed) is int
    assert board.moves(X) == (4,)
    assert type(board.moves(X)[0]) is int
    assert not board.is_empty(np.uint8(4))


def test_apply_move_rejects_empty_side():
    with pytest.raises(InvalidMoveError):
        Board().apply_move(_, 0)


def test_empty_cells_excluding():
    board = Board()
    board.apply_move(X, 1)
    assert board.empty_cells(excluding=5) == [0, 2, 3, 4, 6, 7, 8]
    assert board.empty_cells(excluding=1) == [0, 2, 3, 4, 5, 6, 7, 8]


def test_board_after_eviction_clears_pending_cell_only():
    board = Board()
    for cell in (3, 4, 0):
        board.apply_move(O, cell)
    after = board.board_after_eviction(O)
    assert after[3] is _
    assert after[4] is O and after[0] is O
    # the real board is untouched
    assert board.cells[3] is O


def test_reset_and_copy():
    board = Board()
    board.apply_move(X, 0)
    clone = board.copy()
    board.reset()
    assert board.empty_cells() == list(range(9))
    assert board.moves(X) == ()
    assert clone.moves(X) == (0,)
    assert clone.cells[0] is X


def test_render_marks_pending_eviction_in_lower_case():
    board = Board()
    for cell in (0, 1, 3):
        board.apply_move(X, cell)
    board.apply_move(O, 4)
    text = board.render()
    assert "| x | X | 3 |" in text
    assert "| X | O | 6 |" in text


def test_mark_opposite():
    assert X.opposite() is O
    assert O.opposite() is X
    assert _.opposite() is _


def test_game_state_clear_bumps_generation():
    state = GameState()
    state.board.apply_move(X, 0)
    state.turn = Turn.PLAYER_TURN
    state.status = GameStatus.WON
    state.clear()
    assert state.turn is None
    assert state.status == GameStatus.IN_PROGRESS
    assert not state.is_game_over
    assert state.generation == 1


# ==================== WIN CHECKER ====================

@pytest.mark.parametrize("line", WinChecker.WINNING_LINES)
@pytest.mark.parametrize("side", [X, O])
def test_every_line_wins(line, side):
    board = [_] * 9
    for i in line:
        board[i] = side
    result = WinChecker().check_win(board)
    assert result.winner is side
    assert result.line == line


def test_top_row_scenario():
    checker = WinChecker()
    board = marks("XXX______")
    assert checker.check_winner(board) is X
    assert checker.get_winning_line(board) == (0, 1, 2)


def test_first_line_in_order_is_reported():
    # column 0 and the main diagonal complete at once
    board = marks("XOO" "XX_" "X_X")
    assert WinChecker().get_winning_line(board) == (0, 3, 6)


def test_no_winner_on_mixed_lines():
    checker = WinChecker()
    board = marks("XO_" "_O_" "X__")
    assert checker.check_win(board) is None
    assert not checker.is_draw(board)


def test_draw_needs_full_board_without_winner():
    checker = WinChecker()
    assert checker.is_draw(marks("XOX" "XOO" "OXX"))
    assert not checker.is_draw(marks("XXX" "OOX" "OXO"))


def test_find_completing_cell():
    checker = WinChecker()
    board = marks("OO_" "XX_" "___")
    assert checker.find_completing_cell(board, O, range(9)) == 2
    assert checker.find_completing_cell(board, X, range(9)) == 5
    assert checker.find_completing_cell(board, O, [5, 6]) is None


def test_find_completing_cell_skips_ineligible_line():
    # [3,4,5], [0,3,6] and [2,4,6] all need one more X
    board = marks("___" "XX_" "X__")
    checker = WinChecker()
    assert checker.find_completing_cell(board, X, range(9)) == 5
    assert checker.find_completing_cell(board, X, [0, 1, 2, 7, 8]) == 0
    assert checker.find_completing_cell(board, X, [1, 2, 7, 8]) == 2


# ==================== MOVE VALIDATOR ====================

def started(turn=Turn.PLAYER_TURN):
    state = GameState()
    state.turn = turn
    return state


def test_validator_accepts_legal_move():
    result = MoveValidator().validate_move(started(), X, 4)
    assert result.is_valid
    assert result.error_message is None


@pytest.mark.parametrize("state, side, cell, message", [
    (GameState(), X, 0, "not started"),
    (started(Turn.OPPONENT_TURN), X, 0, "turn"),
    (started(), O, 0, "turn"),
    (started(), X, 9, "Invalid cell"),
    (started(), X, "a", "not an integer"),
])
def test_validator_rejections(state, side, cell, message):
    result = MoveValidator().validate_move(state, side, cell)
    assert not result.is_valid
    assert message in result.error_message


@pytest.mark.parametrize("cell", [np.int64(4), np.int8(4), np.intp(4)])
def test_validator_accepts_numpy_integers(cell):
    assert MoveValidator().validate_move(started(), X, cell).is_valid


def test_validator_rejects_bool_and_float():
    validator = MoveValidator()
    assert "not an integer" in validator.validate_move(started(), X, True).error_message
    assert "not an integer" in validator.validate_move(started(), X, 4.0).error_message


def test_validator_rejects_occupied_and_finished():
    validator = MoveValidator()
    state = started()
    state.board.apply_move(O, 4)
    assert "occupied" in validator.validate_move(state, X, 4).error_message

    state.status = GameStatus.WON
    assert "over" in validator.validate_move(state, X, 0).error_message
    assert validator.get_valid_moves(state) == []


def test_get_valid_moves_lists_empty_cells():
    state = started()
    state.board.apply_move(X, 0)
    assert MoveValidator().get_valid_moves(state) == list(range(1, 9))
