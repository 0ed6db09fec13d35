"""Core systems for the shuffle table UI."""

from pygame_ui.core.animation import Tween, TweenManager, EaseType

__all__ = [
    "Tween",
    "TweenManager",
    "EaseType",
]
