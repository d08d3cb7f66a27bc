"""
Game configuration for Vanishing TicTacToe.
All the settings for the board, the opponent pacing and the UI colors.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tweak the feel of the game.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells, indexed 0-8 row by row

    # How many marks a side may have on the board at once.
    # Placing one more removes that side's oldest mark.
    MAX_MARKS = 3

    # ==================== RANDOMNESS ====================
    # Seed for numpy's default_rng (None = fresh entropy every run)
    RANDOM_SEED = None

    # ==================== PACING (milliseconds) ====================
    OPPONENT_DELAY_MS = 700    # Pause before the opponent answers
    HIGHLIGHT_MS = 2000        # How long a new mark stays highlighted
    BLINK_INTERVAL_MS = 500    # Blink period of a mark about to vanish

    # ==================== SYMBOLS ====================
    PLAYER_SYMBOL = "X"
    OPPONENT_SYMBOL = "O"

    # ==================== COLORS ====================
    BACKGROUND_COLOR = "#1a1a2e"
    CELL_COLOR = "#16213e"
    MARK_COLOR = "#ffffff"
    NEW_MARK_COLOR = "#00FF00"
    WIN_LINE_COLOR = "#FF6666"
    FADED_MARK_COLOR = "#4a5568"   # "off" phase of a blinking mark

    # Turn icons: green = this side is to move
    ICON_ACTIVE_COLOR = "#10b981"
    ICON_PLAYER_IDLE_COLOR = "#3b82f6"
    ICON_BOT_IDLE_COLOR = "#ef4444"
    ICON_SIZE = 48

    # ==================== AUTHORS SCREEN ====================
    AUTHORS_TEXT = (
        "Vanishing TicTacToe\n\n"
        "Each side keeps at most three marks on the board.\n"
        "Your fourth mark wipes out your oldest one,\n"
        "which blinks one move before it vanishes."
    )
