"""Shared test helpers."""

import pytest

from vanishing.game_state import Turn
from vanishing.engine import TurnEngine


class ScriptedRandom:
    """
    Stand-in for numpy's Generator with scripted answers.

    integers() returns the queued coin flips (then `low`), choice() the
    queued picks (then the first candidate).
    """

    def __init__(self, flips=(), picks=()):
        self.flips = list(flips)
        self.picks = list(picks)
        self.choices_seen = []

    def integers(self, low, high=None):
        return self.flips.pop(0) if self.flips else low

    def choice(self, candidates):
        self.choices_seen.append(list(candidates))
        if self.picks:
            pick = self.picks.pop(0)
            assert pick in candidates, f"{pick} not in {candidates}"
            return pick
        return candidates[0]


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def position(scripted):
    """
    Build an engine in a given position.

    Moves are (side, cell) pairs applied straight to the board, oldest first.
    """
    def build(moves, turn=Turn.OPPONENT_TURN, rng=None, max_marks=3):
        engine = TurnEngine(rng=rng if rng is not None else scripted(), max_marks=max_marks)
        for side, cell in moves:
            engine.board.apply_move(side, cell)
        engine.state.turn = turn
        return engine
    return build
