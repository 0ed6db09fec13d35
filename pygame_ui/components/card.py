"""Card sprite with position, flip and lock rendering."""

from typing import Optional, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.utils.math_utils import clamp


class CardSprite:
    """Visual for one card of the active round.

    The sprite mirrors what the sequencer last placed: where the card sits,
    its stacking priority, whether it is face up and whether it is locked.
    ``flip_progress`` animates between face down (0.0) and face up (1.0).
    """

    def __init__(
        self,
        card_index: int,
        face_value: str,
        x: float = 0,
        y: float = 0,
        face_up: bool = False,
    ):
        self.card_index = card_index
        self.face_value = face_value

        self._x = x
        self._y = y
        self._flip_progress = 1.0 if face_up else 0.0

        self.slot: Optional[int] = None
        self.priority = 0
        self.locked = True
        self.hovered = False

        self._font: Optional[pygame.font.Font] = None
        self._corner_font: Optional[pygame.font.Font] = None

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._x = value

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._y = value

    @property
    def position(self) -> Tuple[float, float]:
        return (self._x, self._y)

    @position.setter
    def position(self, value: Tuple[float, float]) -> None:
        self._x, self._y = value

    @property
    def flip_progress(self) -> float:
        return self._flip_progress

    @flip_progress.setter
    def flip_progress(self, value: float) -> None:
        self._flip_progress = clamp(value, 0.0, 1.0)

    @property
    def is_face_up(self) -> bool:
        return self._flip_progress > 0.5

    @property
    def rect(self) -> pygame.Rect:
        """Screen rectangle, centered on the sprite position."""
        rect = pygame.Rect(0, 0, DIMENSIONS.CARD_WIDTH, DIMENSIONS.CARD_HEIGHT)
        rect.center = (int(self._x), int(self._y))
        return rect

    def contains_point(self, point: Tuple[float, float]) -> bool:
        """Check if a point is inside the card."""
        return self.rect.collidepoint(point)

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, int(DIMENSIONS.CARD_HEIGHT * 0.4))
        return self._font

    @property
    def corner_font(self) -> pygame.font.Font:
        if self._corner_font is None:
            self._corner_font = pygame.font.Font(None, int(DIMENSIONS.CARD_HEIGHT * 0.18))
        return self._corner_font

    def _render_face(self, width: int, height: int) -> pygame.Surface:
        """Render the face-up side of the card."""
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        rect = pygame.Rect(0, 0, width, height)
        radius = DIMENSIONS.CARD_CORNER_RADIUS
        pygame.draw.rect(surface, COLORS.CARD_WHITE, rect, border_radius=radius)
        pygame.draw.rect(surface, COLORS.CARD_BLACK, rect, width=2, border_radius=radius)

        value = self.font.render(self.face_value, True, COLORS.CARD_BLACK)
        surface.blit(value, value.get_rect(center=(width // 2, height // 2)))

        corner = self.corner_font.render(self.face_value, True, COLORS.CARD_BLACK)
        surface.blit(corner, (8, 6))
        corner = pygame.transform.rotate(corner, 180)
        surface.blit(
            corner,
            (width - 8 - corner.get_width(), height - 6 - corner.get_height()),
        )
        return surface

    def _render_back(self, width: int, height: int) -> pygame.Surface:
        """Render the face-down (back) side of the card."""
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        rect = pygame.Rect(0, 0, width, height)
        radius = DIMENSIONS.CARD_CORNER_RADIUS
        pygame.draw.rect(surface, COLORS.CARD_BACK, rect, border_radius=radius)
        pygame.draw.rect(surface, COLORS.CARD_BLACK, rect, width=2, border_radius=radius)

        inner_rect = rect.inflate(-12, -12)
        pygame.draw.rect(surface, COLORS.CARD_BACK_PATTERN, inner_rect, border_radius=4)

        # Diagonal lattice
        pattern_color = (*COLORS.CARD_BACK[:3], 60)
        for i in range(-height, width + height, 16):
            pygame.draw.line(surface, pattern_color, (i, 6), (i + height, height - 6), 1)
            pygame.draw.line(surface, pattern_color, (i + height, 6), (i, height - 6), 1)
        return surface

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the card with its shadow, squashed horizontally mid-flip."""
        width = DIMENSIONS.CARD_WIDTH
        height = DIMENSIONS.CARD_HEIGHT

        # Full width at either end of the flip, edge-on at the midpoint
        flip_factor = abs(self._flip_progress - 0.5) * 2
        apparent_width = max(4, int(width * flip_factor))

        if self.is_face_up:
            card = self._render_face(width, height)
        else:
            card = self._render_back(width, height)
        if apparent_width != width:
            card = pygame.transform.scale(card, (apparent_width, height))

        if self.locked and self.is_face_up:
            tint = pygame.Surface(card.get_size(), pygame.SRCALPHA)
            tint.fill(COLORS.CARD_LOCKED_TINT)
            card.blit(tint, (0, 0))

        lift = -6 if self.hovered and not self.locked else 0
        rect = card.get_rect(center=(int(self._x), int(self._y) + lift))

        offset = DIMENSIONS.CARD_SHADOW_OFFSET
        shadow = pygame.Surface(card.get_size(), pygame.SRCALPHA)
        pygame.draw.rect(
            shadow,
            COLORS.SHADOW,
            shadow.get_rect(),
            border_radius=DIMENSIONS.CARD_CORNER_RADIUS,
        )
        surface.blit(shadow, rect.move(offset, offset))
        surface.blit(card, rect)

        if self.hovered and not self.locked:
            pygame.draw.rect(
                surface,
                COLORS.GOLD,
                rect.inflate(4, 4),
                width=2,
                border_radius=DIMENSIONS.CARD_CORNER_RADIUS,
            )
