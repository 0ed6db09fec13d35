"""Floating toast notifications for table notices."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

import pygame

from pygame_ui.config import ANIMATION, COLORS
from pygame_ui.utils.math_utils import lerp


class ToastType(Enum):
    """Types of toast notifications."""

    INFO = auto()
    WARNING = auto()


TOAST_COLORS = {
    ToastType.INFO: COLORS.TEXT_WHITE,
    ToastType.WARNING: COLORS.GOLD,
}


@dataclass
class Toast:
    """A single floating toast notification."""

    text: str
    x: float
    y: float
    toast_type: ToastType = ToastType.INFO
    duration: float = ANIMATION.TOAST_DURATION
    font_size: int = 30

    elapsed: float = field(default=0.0, init=False)
    alpha: float = field(default=255.0, init=False)
    offset_y: float = field(default=0.0, init=False)
    completed: bool = field(default=False, init=False)

    _font: Optional[pygame.font.Font] = field(default=None, init=False)

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)
        return self._font

    @property
    def color(self) -> Tuple[int, int, int]:
        return TOAST_COLORS.get(self.toast_type, COLORS.TEXT_WHITE)

    def update(self, dt: float) -> bool:
        """Update toast animation.

        Args:
            dt: Delta time in seconds

        Returns:
            True if still active, False if completed
        """
        self.elapsed += dt
        progress = self.elapsed / self.duration if self.duration > 0 else 1.0

        if progress >= 1.0:
            self.completed = True
            return False

        self.offset_y = -progress * 30

        # Fade out in last 30%
        if progress > 0.7:
            self.alpha = lerp(255, 0, (progress - 0.7) / 0.3)
        else:
            self.alpha = 255

        return True

    def draw(self, surface: pygame.Surface) -> None:
        if self.completed:
            return

        rendered = self.font.render(self.text, True, self.color)
        rendered.set_alpha(int(self.alpha))
        rect = rendered.get_rect(center=(int(self.x), int(self.y + self.offset_y)))
        surface.blit(rendered, rect)


class ToastManager:
    """Manages multiple toast notifications."""

    def __init__(self, max_toasts: int = 3):
        self.toasts: List[Toast] = []
        self.max_toasts = max_toasts

    def spawn(
        self,
        text: str,
        x: float,
        y: float,
        toast_type: ToastType = ToastType.INFO,
        duration: Optional[float] = None,
    ) -> Toast:
        """Spawn a new toast notification.

        Args:
            text: Text to display
            x: X position
            y: Y position
            toast_type: Type of toast (affects color)
            duration: How long to show (default from config)

        Returns:
            The created toast
        """
        if duration is None:
            duration = ANIMATION.TOAST_DURATION

        toast = Toast(text=text, x=x, y=y, toast_type=toast_type, duration=duration)
        self.toasts.append(toast)

        # Remove oldest if over limit
        while len(self.toasts) > self.max_toasts:
            self.toasts.pop(0)

        return toast

    def update(self, dt: float) -> None:
        self.toasts = [toast for toast in self.toasts if toast.update(dt)]

    def draw(self, surface: pygame.Surface) -> None:
        for toast in self.toasts:
            toast.draw(surface)

    def clear(self) -> None:
        """Remove all toasts."""
        self.toasts.clear()
