"""UI components for the shuffle table."""

from pygame_ui.components.card import CardSprite
from pygame_ui.components.toast import Toast, ToastManager, ToastType
from pygame_ui.components.button import Button, ButtonState

__all__ = [
    "CardSprite",
    "Toast",
    "ToastManager",
    "ToastType",
    "Button",
    "ButtonState",
]
