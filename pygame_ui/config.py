"""Configuration constants for the pygame shuffle table."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Colors:
    """Color palette for the table UI."""

    # Felt and background
    FELT_GREEN: Tuple[int, int, int] = (34, 87, 59)
    FELT_DARK: Tuple[int, int, int] = (25, 65, 44)

    # Card colors
    CARD_WHITE: Tuple[int, int, int] = (245, 243, 238)
    CARD_BLACK: Tuple[int, int, int] = (28, 28, 32)
    CARD_BACK: Tuple[int, int, int] = (65, 85, 130)
    CARD_BACK_PATTERN: Tuple[int, int, int] = (85, 105, 150)
    CARD_LOCKED_TINT: Tuple[int, int, int, int] = (0, 0, 0, 40)

    # UI accents
    GOLD: Tuple[int, int, int] = (255, 200, 87)

    # Effects
    SHADOW: Tuple[int, int, int, int] = (0, 0, 0, 100)

    # Text
    TEXT_WHITE: Tuple[int, int, int] = (240, 240, 240)
    TEXT_MUTED: Tuple[int, int, int] = (150, 150, 160)

    # Buttons
    BUTTON_DEFAULT: Tuple[int, int, int] = (60, 70, 90)
    BUTTON_HOVER: Tuple[int, int, int] = (80, 95, 120)
    BUTTON_PRESSED: Tuple[int, int, int] = (45, 55, 70)
    BUTTON_DISABLED: Tuple[int, int, int] = (50, 50, 55)


@dataclass(frozen=True)
class Dimensions:
    """Dimension constants for layout and sizing."""

    # Screen
    SCREEN_WIDTH: int = 1280
    SCREEN_HEIGHT: int = 720
    TARGET_FPS: int = 60

    # Cards
    CARD_WIDTH: int = 100
    CARD_HEIGHT: int = 140
    CARD_CORNER_RADIUS: int = 8
    CARD_SHADOW_OFFSET: int = 4

    # Layout: slots are spaced 120px apart like the original page
    SLOT_SPACING: int = 120
    TABLE_Y: int = SCREEN_HEIGHT // 2
    DECK_POSITION: Tuple[int, int] = (90, 90)
    OFFSTAGE_Y: int = SCREEN_HEIGHT + 200

    # UI Elements
    BUTTON_WIDTH: int = 140
    BUTTON_HEIGHT: int = 45
    BUTTON_CORNER_RADIUS: int = 6
    BUTTON_ROW_Y: int = SCREEN_HEIGHT - 80


@dataclass(frozen=True)
class AnimationConfig:
    """Animation timing constants."""

    # Durations (in seconds)
    CARD_FLIP_DURATION: float = 0.5
    TOAST_DURATION: float = 2.5


# Global instances for easy import
COLORS = Colors()
DIMENSIONS = Dimensions()
ANIMATION = AnimationConfig()
