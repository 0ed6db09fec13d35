"""Shuffle table scene - renders and drives a ShuffleSequencer."""

import logging
from random import Random
from typing import Dict, List, Optional, Tuple

import pygame

from config import config
from core.game import ManualScheduler, Phase, ShuffleSequencer
from core.game.engine import SHUFFLED_MESSAGE
from core.game.state import TIMED_PHASES

from pygame_ui.config import ANIMATION, COLORS, DIMENSIONS
from pygame_ui.core.animation import EaseType, TweenManager
from pygame_ui.components.button import Button
from pygame_ui.components.card import CardSprite
from pygame_ui.components.toast import ToastManager, ToastType
from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.utils.math_utils import gather_x, slot_x

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    Phase.IDLE: "Choose how many cards, then press Deal.",
    Phase.DEALT: "Remember the cards, then press Shuffle.",
    Phase.FLIPPING_DOWN: "Shuffling...",
    Phase.GATHERING: "Shuffling...",
    Phase.REDISTRIBUTING: "Shuffling...",
    Phase.SETTLED: SHUFFLED_MESSAGE,
    Phase.REVEALED: SHUFFLED_MESSAGE,
    Phase.RESTARTING: "",
}


class TableScene(BaseScene):
    """The shuffle table.

    Acts as the sequencer's renderer: every ``place_card`` becomes tweens on
    a card sprite. Phase timers run on a manual clock advanced each frame,
    and a timed phase is completed early as soon as its tweens have landed.
    """

    def __init__(self, card_count: object = None, rng: Optional[Random] = None):
        super().__init__()

        self.tween_manager = TweenManager()
        self.toast_manager = ToastManager()
        self.scheduler = ManualScheduler()

        self.round_id = ""
        self.sprites: Dict[int, CardSprite] = {}
        self.retiring: List[CardSprite] = []
        self.deck_sprite = CardSprite(-1, "", *DIMENSIONS.DECK_POSITION)

        # (round_id, phase) of the timed phase whose tweens are in flight
        self._awaiting: Optional[Tuple[str, Phase]] = None

        self.sequencer = ShuffleSequencer(
            renderer=self,
            scheduler=self.scheduler,
            card_count=card_count,
            rng=rng,
        )
        self.selected_count = self.sequencer.round.size

        self.buttons: List[Button] = []
        self._setup_buttons()

        self._font: Optional[pygame.font.Font] = None

    # Renderer protocol

    def begin_round(self, round_id: str) -> None:
        """Send the previous round's sprites off-stage and start a new set."""
        self.round_id = round_id
        self._awaiting = None

        duration = config.shuffle.timings.restart_duration
        for sprite in self.sprites.values():
            self.tween_manager.cancel_for(sprite)
            self.retiring.append(sprite)
            self.tween_manager.create(
                sprite,
                "position",
                (sprite.x, DIMENSIONS.OFFSTAGE_Y),
                duration,
                EaseType.EASE_IN,
                on_complete=lambda s=sprite: self._drop_retired(s),
            )
        self.sprites = {}

    def place_card(
        self,
        card_index: int,
        slot: Optional[int],
        priority: Optional[int],
        face_up: bool,
        locked: bool,
    ) -> None:
        sprite = self.sprites.get(card_index)
        if sprite is None:
            sprite = self._spawn_sprite(card_index)

        sprite.slot = slot
        sprite.priority = priority or 0
        sprite.locked = locked

        phase = self.sequencer.phase
        duration = self._duration_for(phase)
        group = f"{self.round_id}:{phase.name}"

        card_count = len(self.sequencer.round)
        if slot is None:
            x = gather_x(card_count, DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SLOT_SPACING)
        else:
            x = slot_x(slot, card_count, DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SLOT_SPACING)
        target = (x, DIMENSIONS.TABLE_Y)

        if sprite.position != target:
            self.tween_manager.create(
                sprite, "position", target, duration, EaseType.EASE_IN_OUT, group=group
            )
        flip_target = 1.0 if face_up else 0.0
        if sprite.flip_progress != flip_target:
            self.tween_manager.create(
                sprite, "flip_progress", flip_target, duration, EaseType.LINEAR, group=group
            )

        if phase in TIMED_PHASES:
            self._awaiting = (self.round_id, phase)

    def notify(self, message: str) -> None:
        self.toast_manager.spawn(
            message,
            DIMENSIONS.SCREEN_WIDTH / 2,
            DIMENSIONS.TABLE_Y - DIMENSIONS.CARD_HEIGHT,
            ToastType.WARNING,
        )

    # Layout and controls

    def _setup_buttons(self) -> None:
        y = DIMENSIONS.BUTTON_ROW_Y
        center = DIMENSIONS.SCREEN_WIDTH / 2
        step = DIMENSIONS.BUTTON_WIDTH + 20
        small = DIMENSIONS.BUTTON_HEIGHT

        self.minus_button = Button(center - 2 * step - 40, y, "-", self._decrease_count, width=small)
        self.plus_button = Button(center - 2 * step + 40, y, "+", self._increase_count, width=small)
        self.deal_button = Button(center - step / 2, y, "Deal", self._on_deal)
        self.shuffle_button = Button(center + step / 2, y, "Shuffle", self._on_shuffle)
        self.restart_button = Button(center + 3 * step / 2, y, "Restart", self._on_restart)

        self.buttons = [
            self.minus_button,
            self.plus_button,
            self.deal_button,
            self.shuffle_button,
            self.restart_button,
        ]

    def _update_button_states(self) -> None:
        can_deal = self.sequencer.can_deal
        factory = self.sequencer.factory
        self.minus_button.set_enabled(can_deal and self.selected_count > factory.min_cards)
        self.plus_button.set_enabled(can_deal and self.selected_count < factory.max_cards)
        self.deal_button.set_enabled(can_deal)
        # Shuffle stays clickable after the sequence so a repeat press can explain itself
        self.shuffle_button.set_enabled(self.sequencer.round.placed)

    def _decrease_count(self) -> None:
        self.selected_count = self.sequencer.factory.clamp(self.selected_count - 1)

    def _increase_count(self) -> None:
        self.selected_count = self.sequencer.factory.clamp(self.selected_count + 1)

    def _on_deal(self) -> None:
        self.sequencer.deal(self.selected_count)

    def _on_shuffle(self) -> None:
        self.sequencer.shuffle()

    def _on_restart(self) -> None:
        self.sequencer.restart(self.selected_count)

    # Sprites and timing

    def _spawn_sprite(self, card_index: int) -> CardSprite:
        card = self.sequencer.round.card(card_index)
        face_value = card.face_value if card is not None else ""
        sprite = CardSprite(card_index, face_value, *DIMENSIONS.DECK_POSITION)
        self.sprites[card_index] = sprite
        return sprite

    def _drop_retired(self, sprite: CardSprite) -> None:
        if sprite in self.retiring:
            self.retiring.remove(sprite)

    def _duration_for(self, phase: Phase) -> float:
        timings = self.sequencer.timings
        return {
            Phase.DEALT: timings.deal_duration,
            Phase.FLIPPING_DOWN: timings.flip_duration,
            Phase.GATHERING: timings.gather_duration,
            Phase.REDISTRIBUTING: timings.redistribute_duration,
        }.get(phase, ANIMATION.CARD_FLIP_DURATION)

    def _check_phase_animation(self) -> None:
        """Complete the awaited phase once all of its tweens have landed."""
        if self._awaiting is None:
            return
        round_id, phase = self._awaiting
        if self.tween_manager.is_group_animating(f"{round_id}:{phase.name}"):
            return
        self._awaiting = None
        if self.sequencer.pending_phase == phase:
            logger.debug("Animation for %s finished, completing phase", phase)
            self.sequencer.complete_phase(phase, round_id=round_id)

    def _sprites_by_priority(self) -> List[CardSprite]:
        """Sprites in draw order, lowest priority first."""
        return sorted(self.sprites.values(), key=lambda s: (s.priority, s.card_index))

    def _card_at(self, point: Tuple[float, float]) -> Optional[CardSprite]:
        for sprite in reversed(self._sprites_by_priority()):
            if sprite.contains_point(point):
                return sprite
        return None

    # Scene loop

    def handle_event(self, event: pygame.event.Event) -> bool:
        for button in self.buttons:
            if button.handle_event(event):
                return True

        if event.type == pygame.MOUSEMOTION:
            hovered = self._card_at(event.pos)
            for sprite in self.sprites.values():
                sprite.hovered = sprite is hovered
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            sprite = self._card_at(event.pos)
            if sprite is not None:
                self.sequencer.on_card_activated(sprite.card_index)
                return True

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_d:
                self._on_deal()
                return True
            if event.key == pygame.K_s:
                self._on_shuffle()
                return True
            if event.key == pygame.K_r:
                self._on_restart()
                return True

        return False

    def update(self, dt: float) -> None:
        self.tween_manager.update(dt)
        self._check_phase_animation()
        self.scheduler.advance(dt)
        self.toast_manager.update(dt)

        self._update_button_states()
        for button in self.buttons:
            button.update(dt)

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
        return self._font

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLORS.FELT_GREEN)
        pygame.draw.rect(
            surface,
            COLORS.FELT_DARK,
            pygame.Rect(0, DIMENSIONS.BUTTON_ROW_Y - 50, DIMENSIONS.SCREEN_WIDTH, 100),
        )

        if self.sequencer.phase == Phase.IDLE:
            self.deck_sprite.draw(surface)

        for sprite in self.retiring:
            sprite.draw(surface)
        for sprite in self._sprites_by_priority():
            sprite.draw(surface)

        status = self.font.render(STATUS_TEXT[self.sequencer.phase], True, COLORS.TEXT_WHITE)
        surface.blit(status, status.get_rect(center=(DIMENSIONS.SCREEN_WIDTH // 2, 60)))

        count = self.font.render(f"Cards: {self.selected_count}", True, COLORS.TEXT_MUTED)
        surface.blit(
            count,
            count.get_rect(
                center=(int(self.minus_button.center_x + 40), DIMENSIONS.BUTTON_ROW_Y - 40)
            ),
        )

        for button in self.buttons:
            button.draw(surface)
        self.toast_manager.draw(surface)
