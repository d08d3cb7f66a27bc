"""
Turn indicator icons drawn with Pillow.
The icon of the side to move is green, the other one keeps its idle color.
"""

from PIL import Image, ImageDraw

from .config import GameConfig


def make_turn_icon(symbol: str, active: bool, idle_color: str, size: int = GameConfig.ICON_SIZE) -> Image.Image:
    """
    Draw a round badge with the side's symbol in it.

    Args:
        symbol: Text to draw in the middle ("X" or "O").
        active: True if this side is to move.
        idle_color: Fill color when it is not this side's turn.
        size: Width and height in pixels.

    Returns:
        RGBA image, ready for ImageTk.PhotoImage.
    """
    fill = GameConfig.ICON_ACTIVE_COLOR if active else idle_color
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    margin = max(1, size // 12)
    draw.ellipse((margin, margin, size - margin - 1, size - margin - 1), fill=fill)

    # Centered using the default bitmap font
    left, top, right, bottom = draw.textbbox((0, 0), symbol)
    x = (size - (right - left)) / 2 - left
    y = (size - (bottom - top)) / 2 - top
    draw.text((x, y), symbol, fill="white")
    return image


def player_icon(active: bool) -> Image.Image:
    return make_turn_icon(GameConfig.PLAYER_SYMBOL, active, GameConfig.ICON_PLAYER_IDLE_COLOR)


def bot_icon(active: bool) -> Image.Image:
    return make_turn_icon(GameConfig.OPPONENT_SYMBOL, active, GameConfig.ICON_BOT_IDLE_COLOR)
