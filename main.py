"""
Main entry point for Vanishing TicTacToe.

Launches the Tkinter UI by default. With --no-ui the game runs in the
console instead: type 1-9 to place your mark, 'r' to start over and
'q' to quit.
"""

import logging
import time
from typing import Optional

import numpy as np

from vanishing.config import GameConfig
from vanishing.engine import EngineSnapshot, TurnEngine
from vanishing.game_state import InvalidMoveError, Mark


class ConsoleGame:
    """
    Console controller for Vanishing TicTacToe.

    Game flow:
    1. A coin flip decides who starts
    2. Human (X) types a cell number
    3. Bot (O) answers after a short pause
    4. Repeat until someone wins
    """

    def __init__(self, engine: Optional[TurnEngine] = None, delay_ms: int = GameConfig.OPPONENT_DELAY_MS):
        """
        Initialize the console game.

        Args:
            engine: Engine to drive (a fresh one by default).
            delay_ms: Pause before the bot moves.
        """
        self.engine = engine if engine is not None else TurnEngine()
        self.delay_ms = delay_ms
        self.is_running = False

    def start(self):
        """Play until the user quits."""
        print("\nVanishing TicTacToe - you are X, the bot is O.")
        print("Marks in lower case vanish on their owner's next move.")
        print("Type 1-9 to play, 'r' to restart, 'q' to quit.\n")

        snapshot = self.engine.start()
        self.is_running = True
        while self.is_running:
            snapshot = self._step(snapshot)

    def _step(self, snapshot: EngineSnapshot) -> EngineSnapshot:
        """One round of the loop: show the board, then let someone act."""
        self.engine.board.print_board()

        if snapshot.is_game_over:
            self._show_game_result(snapshot)
            return self._ask_play_again(snapshot)

        if snapshot.turn.side == Mark.OPPONENT:
            print("\n>>> Bot is thinking...")
            time.sleep(self.delay_ms / 1000)
            snapshot = self.engine.compute_and_apply_opponent_move(snapshot.generation)
            self._report_move(snapshot, "Bot")
            return snapshot

        return self._human_turn(snapshot)

    def _human_turn(self, snapshot: EngineSnapshot) -> EngineSnapshot:
        pending = snapshot.pending_eviction(Mark.PLAYER)
        if pending is not None:
            print(f"Your mark on {pending + 1} vanishes with your next move.")

        command = input("Your move (1-9): ").strip().lower()
        if command == "q":
            self.is_running = False
            return snapshot
        if command == "r":
            print("\nRestarting...")
            return self.engine.start()

        try:
            cell = int(command) - 1
        except ValueError:
            print(f"'{command}' is not a cell number.")
            return snapshot

        try:
            snapshot = self.engine.submit_player_move(cell)
        except InvalidMoveError as e:
            print(f"Move rejected: {e}")
            return snapshot

        self._report_move(snapshot, "You")
        return snapshot

    def _report_move(self, snapshot: EngineSnapshot, who: str):
        move = snapshot.last_move
        if move is None:
            if snapshot.stalemate:
                print(f">>> {who} had nowhere to go.")
            return
        text = f">>> {who} placed {move.side.value} on {move.placed + 1}"
        if move.evicted is not None:
            text += f" (mark on {move.evicted + 1} vanished)"
        print(text)

    def _show_game_result(self, snapshot: EngineSnapshot):
        """Show the final game result."""
        print("\n" + "=" * 40)
        if snapshot.winner == Mark.PLAYER:
            line = ", ".join(str(i + 1) for i in snapshot.winning_line)
            print(f"   You win! ({line})")
        elif snapshot.winner == Mark.OPPONENT:
            line = ", ".join(str(i + 1) for i in snapshot.winning_line)
            print(f"   Bot wins! ({line})")
        elif snapshot.is_draw:
            print("   It's a draw!")
        else:
            print("   Stalemate: the bot had nowhere to move.")
        print("=" * 40)

    def _ask_play_again(self, snapshot: EngineSnapshot) -> EngineSnapshot:
        answer = input("Play again? (y/n): ").strip().lower()
        if answer.startswith("y"):
            return self.engine.start()
        self.is_running = False
        return snapshot


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Vanishing TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=GameConfig.RANDOM_SEED,
        help="Seed for the coin flip and the bot's random moves"
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=GameConfig.OPPONENT_DELAY_MS,
        help="Milliseconds the bot waits before moving"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s"
    )

    engine = TurnEngine(rng=np.random.default_rng(args.seed))

    # Launch UI by default
    if not args.no_ui:
        from ui import VanishingUI
        ui = VanishingUI(engine=engine, delay_ms=args.delay)
        ui.run()
        return 0

    game = ConsoleGame(engine=engine, delay_ms=args.delay)
    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
