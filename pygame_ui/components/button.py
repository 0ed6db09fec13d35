"""Interactive button component with hover and press states."""

from enum import Enum, auto
from typing import Callable, Optional, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS


class ButtonState(Enum):
    """Visual state of a button."""

    NORMAL = auto()
    HOVERED = auto()
    PRESSED = auto()
    DISABLED = auto()


class Button:
    """A table control (Deal, Shuffle, Restart, count selector).

    Clicks fire on release inside the button, matching how the browser
    fires click handlers.
    """

    def __init__(
        self,
        x: float,
        y: float,
        text: str,
        on_click: Optional[Callable[[], None]] = None,
        width: float = DIMENSIONS.BUTTON_WIDTH,
        height: float = DIMENSIONS.BUTTON_HEIGHT,
        font_size: int = 28,
        enabled: bool = True,
    ):
        """Initialize a button centered on (x, y).

        Args:
            x: Center x position
            y: Center y position
            text: Button text
            on_click: Callback function when clicked
            width: Button width
            height: Button height
            font_size: Text font size
            enabled: Whether button is interactive
        """
        self.text = text
        self.on_click = on_click
        self.width = width
        self.height = height
        self.center_x = x
        self.center_y = y
        self.font_size = font_size
        self.enabled = enabled

        self.state = ButtonState.NORMAL if enabled else ButtonState.DISABLED
        self._is_pressed = False

        self.scale = 1.0
        self.target_scale = 1.0

        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)
        return self._font

    @property
    def rect(self) -> pygame.Rect:
        """Get the button's rectangle."""
        rect = pygame.Rect(0, 0, int(self.width), int(self.height))
        rect.center = (int(self.center_x), int(self.center_y))
        return rect

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the button."""
        if enabled == self.enabled:
            return
        self.enabled = enabled
        self._is_pressed = False
        self.state = ButtonState.NORMAL if enabled else ButtonState.DISABLED
        self.target_scale = 1.0

    def contains_point(self, point: Tuple[float, float]) -> bool:
        return self.rect.collidepoint(point)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a pygame event.

        Args:
            event: The pygame event

        Returns:
            True if event was consumed (clicked)
        """
        if not self.enabled:
            return False

        if event.type == pygame.MOUSEMOTION:
            if not self._is_pressed:
                inside = self.contains_point(event.pos)
                self.state = ButtonState.HOVERED if inside else ButtonState.NORMAL
                self.target_scale = 1.05 if inside else 1.0

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.contains_point(event.pos):
                self.state = ButtonState.PRESSED
                self._is_pressed = True
                self.target_scale = 0.95

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1 and self._is_pressed:
                self._is_pressed = False
                if self.contains_point(event.pos):
                    self.state = ButtonState.HOVERED
                    self.target_scale = 1.05
                    if self.on_click:
                        self.on_click()
                    return True
                self.state = ButtonState.NORMAL
                self.target_scale = 1.0

        return False

    def update(self, dt: float) -> None:
        """Ease the hover/press scale towards its target."""
        scale_speed = 15.0
        self.scale += (self.target_scale - self.scale) * min(1.0, scale_speed * dt)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the button."""
        if not self.enabled:
            bg_color = COLORS.BUTTON_DISABLED
            text_color = COLORS.TEXT_MUTED
        elif self.state == ButtonState.PRESSED:
            bg_color = COLORS.BUTTON_PRESSED
            text_color = COLORS.TEXT_WHITE
        elif self.state == ButtonState.HOVERED:
            bg_color = COLORS.BUTTON_HOVER
            text_color = COLORS.TEXT_WHITE
        else:
            bg_color = COLORS.BUTTON_DEFAULT
            text_color = COLORS.TEXT_WHITE

        scaled = pygame.Rect(0, 0, int(self.width * self.scale), int(self.height * self.scale))
        scaled.center = (int(self.center_x), int(self.center_y))
        pygame.draw.rect(
            surface, bg_color, scaled, border_radius=DIMENSIONS.BUTTON_CORNER_RADIUS
        )

        text_surface = self.font.render(self.text, True, text_color)
        surface.blit(text_surface, text_surface.get_rect(center=scaled.center))
