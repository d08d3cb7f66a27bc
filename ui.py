"""
Vanishing TicTacToe UI
A graphical interface for the game using Tkinter.

Shows:
- Main menu (Play / Authors / Quit)
- The 3x3 board, blinking the marks that are about to vanish
- Turn icons for the human and the bot
- Game result, with the winning line highlighted
"""

import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional

from PIL import ImageTk

from vanishing.config import GameConfig
from vanishing.engine import EngineSnapshot, TurnEngine
from vanishing.game_state import InvalidMoveError, Mark, Turn
from vanishing.icons import bot_icon, player_icon


class VanishingUI:
    """
    Main UI class for Vanishing TicTacToe.
    """

    def __init__(self, engine: Optional[TurnEngine] = None, delay_ms: int = GameConfig.OPPONENT_DELAY_MS):
        """Initialize the UI."""
        self.engine = engine if engine is not None else TurnEngine()
        self.delay_ms = delay_ms
        self.snapshot: EngineSnapshot = self.engine.reset()

        # Blink state: cells currently blinking and the "visible" phase
        self.blink_on = True
        self.highlighted: Dict[int, str] = {}  # cell -> after() id of its un-highlight

        self._create_ui()
        self._blink_loop()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Vanishing TicTacToe")
        self.root.configure(bg=GameConfig.BACKGROUND_COLOR)
        self.root.minsize(360, 480)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=GameConfig.BACKGROUND_COLOR)
        style.configure('TLabel', background=GameConfig.BACKGROUND_COLOR, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 18, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 14, 'bold'), foreground='#ffd700')

        self.menu_frame = self._create_menu()
        self.game_frame = self._create_game_screen()
        self.authors_frame = self._create_authors_screen()

        self.root.protocol("WM_DELETE_WINDOW", self._quit)
        self._show(self.menu_frame)

    def _create_menu(self) -> ttk.Frame:
        frame = ttk.Frame(self.root)
        ttk.Label(frame, text="Vanishing TicTacToe", style='Title.TLabel').pack(pady=(40, 30))

        for text, color, command in (
            ("▶ Play", '#10b981', self._open_game),
            ("Authors", '#6366f1', lambda: self._show(self.authors_frame)),
            ("✕ Quit", '#ef4444', self._quit),
        ):
            tk.Button(
                frame,
                text=text,
                font=('Segoe UI', 12, 'bold'),
                bg=color,
                fg='white',
                width=16,
                command=command
            ).pack(pady=8)
        return frame

    def _create_game_screen(self) -> ttk.Frame:
        frame = ttk.Frame(self.root)

        # Turn icons
        icons_frame = ttk.Frame(frame)
        icons_frame.pack(pady=(15, 5))
        self.player_icon_label = ttk.Label(icons_frame, text="You")
        self.player_icon_label.pack(side=tk.LEFT, padx=20)
        self.bot_icon_label = ttk.Label(icons_frame, text="Bot")
        self.bot_icon_label.pack(side=tk.LEFT, padx=20)
        self.icons = {
            (Mark.PLAYER, True): ImageTk.PhotoImage(player_icon(True)),
            (Mark.PLAYER, False): ImageTk.PhotoImage(player_icon(False)),
            (Mark.OPPONENT, True): ImageTk.PhotoImage(bot_icon(True)),
            (Mark.OPPONENT, False): ImageTk.PhotoImage(bot_icon(False)),
        }

        # Board
        board_frame = ttk.Frame(frame)
        board_frame.pack(pady=10)
        self.cell_buttons = []
        size = GameConfig.BOARD_SIZE
        for cell in range(GameConfig.CELL_COUNT):
            button = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=3,
                height=1,
                bg=GameConfig.CELL_COLOR,
                fg=GameConfig.MARK_COLOR,
                activebackground=GameConfig.CELL_COLOR,
                relief='ridge',
                borderwidth=2,
                command=lambda c=cell: self._on_cell_click(c)
            )
            button.grid(row=cell // size, column=cell % size, padx=2, pady=2)
            self.cell_buttons.append(button)

        self.result_label = ttk.Label(frame, text="", style='Status.TLabel')
        self.result_label.pack(pady=5)

        self.message_label = ttk.Label(frame, text="")
        self.message_label.pack()

        controls = ttk.Frame(frame)
        controls.pack(pady=15)
        tk.Button(
            controls,
            text="🔄 Reset",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=10,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)
        tk.Button(
            controls,
            text="← Back",
            font=('Segoe UI', 11, 'bold'),
            bg='#2d3748',
            fg='white',
            width=10,
            command=self._back_to_menu
        ).pack(side=tk.LEFT, padx=5)
        return frame

    def _create_authors_screen(self) -> ttk.Frame:
        frame = ttk.Frame(self.root)
        ttk.Label(frame, text="Authors", style='Title.TLabel').pack(pady=(40, 20))
        ttk.Label(frame, text=GameConfig.AUTHORS_TEXT, justify=tk.CENTER).pack(padx=20, pady=10)
        tk.Button(
            frame,
            text="← Back",
            font=('Segoe UI', 11, 'bold'),
            bg='#2d3748',
            fg='white',
            width=10,
            command=lambda: self._show(self.menu_frame)
        ).pack(pady=20)
        return frame

    def _show(self, frame: ttk.Frame):
        """Switch screens."""
        for other in (self.menu_frame, self.game_frame, self.authors_frame):
            other.pack_forget()
        frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

    # ==================== GAME FLOW ====================

    def _open_game(self):
        self._show(self.game_frame)
        self._new_game()

    def _back_to_menu(self):
        # Drops any scheduled bot move along with the game
        self._clear_highlights()
        self.snapshot = self.engine.reset()
        self._refresh()
        self._show(self.menu_frame)

    def _new_game(self):
        """Start a new game with a random first mover."""
        self._clear_highlights()
        self.message_label.configure(text="")

        self.snapshot = self.engine.start()
        self._refresh()
        self._schedule_opponent_if_needed()

    def _on_cell_click(self, cell: int):
        try:
            self.snapshot = self.engine.submit_player_move(cell)
        except InvalidMoveError as e:
            self.message_label.configure(text=str(e))
            return

        self.message_label.configure(text="")
        self._after_move()

    def _schedule_opponent_if_needed(self):
        if self.snapshot.is_game_over or self.snapshot.turn != Turn.OPPONENT_TURN:
            return
        generation = self.snapshot.generation
        self.root.after(self.delay_ms, lambda: self._opponent_move(generation))

    def _opponent_move(self, generation: int):
        """Bot's delayed move. Ignored if the game was reset meanwhile."""
        try:
            self.snapshot = self.engine.compute_and_apply_opponent_move(generation)
        except InvalidMoveError as e:
            print(f"Bot move skipped: {e}")
            return
        self._after_move()

    def _after_move(self):
        move = self.snapshot.last_move
        if move is not None:
            self._highlight(move.placed)
        self._refresh()
        self._schedule_opponent_if_needed()

    # ==================== DRAWING ====================

    def _highlight(self, cell: int):
        """Show a new mark in green for a while."""
        if cell in self.highlighted:
            self.root.after_cancel(self.highlighted[cell])
        self.highlighted[cell] = self.root.after(
            GameConfig.HIGHLIGHT_MS, lambda: self._unhighlight(cell)
        )

    def _clear_highlights(self):
        for after_id in self.highlighted.values():
            self.root.after_cancel(after_id)
        self.highlighted.clear()

    def _unhighlight(self, cell: int):
        self.highlighted.pop(cell, None)
        self._refresh()

    def _refresh(self):
        """Redraw board, icons and result from the latest snapshot."""
        snapshot = self.snapshot
        doomed = {snapshot.player_pending, snapshot.opponent_pending} - {None}
        if snapshot.is_game_over:
            doomed = set()
        winning = set(snapshot.winning_line or ())

        for cell, button in enumerate(self.cell_buttons):
            mark = snapshot.board[cell]
            button.configure(text="" if mark is Mark.EMPTY else mark.value)

            if cell in winning:
                color = GameConfig.WIN_LINE_COLOR
            elif cell in self.highlighted and mark is not Mark.EMPTY:
                color = GameConfig.NEW_MARK_COLOR
            elif cell in doomed and not self.blink_on:
                color = GameConfig.FADED_MARK_COLOR
            else:
                color = GameConfig.MARK_COLOR
            button.configure(fg=color)

        player_active = snapshot.turn == Turn.PLAYER_TURN and not snapshot.is_game_over
        bot_active = snapshot.turn == Turn.OPPONENT_TURN and not snapshot.is_game_over
        self.player_icon_label.configure(image=self.icons[(Mark.PLAYER, player_active)], compound=tk.TOP)
        self.bot_icon_label.configure(image=self.icons[(Mark.OPPONENT, bot_active)], compound=tk.TOP)

        if snapshot.winner == Mark.PLAYER:
            self.result_label.configure(text="Crosses win!")
        elif snapshot.winner == Mark.OPPONENT:
            self.result_label.configure(text="Noughts win!")
        elif snapshot.is_draw:
            self.result_label.configure(text="It's a draw!")
        elif snapshot.stalemate:
            self.result_label.configure(text="Bot is stuck. Press Reset.")
        else:
            self.result_label.configure(text="")

    def _blink_loop(self):
        """Toggle the blink phase of marks about to vanish."""
        self.blink_on = not self.blink_on
        self._refresh()
        self.root.after(GameConfig.BLINK_INTERVAL_MS, self._blink_loop)

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    ui = VanishingUI()
    ui.run()


if __name__ == "__main__":
    main()
