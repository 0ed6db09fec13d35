"""Shuffle sequencer with state machine."""

import logging
from random import Random
from typing import Callable

from transitions import Machine

from config import PhaseTimings, config
from core.cards import Card, CardView, DeckFactory, random_permutation
from core.errors import ConfigurationError, PhaseViolation
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.renderer import NullRenderer, Renderer
from core.game.round import Round
from core.game.scheduler import Continuation, ManualScheduler, Scheduler
from core.game.state import REVEAL_PHASES, Phase

logger = logging.getLogger(__name__)

SHUFFLED_MESSAGE = "Cards are shuffled! Click on any card to reveal."
ALREADY_SHUFFLED_NOTICE = "Click on a card to reveal it, or press Restart to play again."


class ShuffleSequencer:
    """
    Drives one table of cards through deal, shuffle and reveal.

    The sequencer owns the active round exclusively. Renderers receive
    ``place_card``/``notify`` calls and may read ``CardView`` snapshots, but
    never mutate cards. Timed phases advance through the scheduler, or earlier
    when the renderer reports the phase's animation finished.
    """

    # State machine states
    STATES = [p.name.lower() for p in Phase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "place_cards", "source": "idle", "dest": "dealt"},
        {"trigger": "start_shuffle", "source": "dealt", "dest": "flipping_down"},
        {"trigger": "gather", "source": "flipping_down", "dest": "gathering"},
        {"trigger": "redistribute", "source": "gathering", "dest": "redistributing"},
        {"trigger": "settle", "source": "redistributing", "dest": "settled"},
        {"trigger": "turn_card", "source": ["settled", "revealed"], "dest": "revealed"},
        {"trigger": "retire_round", "source": "*", "dest": "restarting"},
        {"trigger": "reset_round", "source": "restarting", "dest": "idle"},
    ]

    def __init__(
        self,
        renderer: Renderer | None = None,
        factory: DeckFactory | None = None,
        scheduler: Scheduler | None = None,
        timings: PhaseTimings | None = None,
        card_count: object = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a sequencer and build its first round.

        Args:
            renderer: Visual collaborator (discards everything if not provided)
            factory: Deck factory (built from config if not provided)
            scheduler: Continuation scheduler (manual clock if not provided)
            timings: Phase durations (config defaults if not provided)
            card_count: Size of the first round (config default if not provided)
            rng: Random number generator for the shuffle permutations

        Raises:
            ConfigurationError: If the first round cannot be built
        """
        settings = config.shuffle
        if factory is None:
            factory = DeckFactory(
                pool=settings.face_pool,
                min_cards=settings.min_cards,
                max_cards=settings.max_cards,
                rng=rng or Random(settings.seed),
            )

        self.factory = factory
        self.rng = rng or factory.rng
        self.renderer: Renderer = renderer or NullRenderer()
        self.scheduler = scheduler or ManualScheduler()
        self.timings = timings or settings.timings
        self.events = EventEmitter()
        self._pending: Continuation | None = None

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_on_phase_changed",
        )

        if card_count is None:
            card_count = settings.default_card_count
        self._round = Round(cards=self.factory.build_round(card_count))
        self._announce_round()

    @property
    def phase(self) -> Phase:
        """Get current phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def round(self) -> Round:
        """Get the active round."""
        return self._round

    @property
    def round_id(self) -> str:
        return self._round.round_id

    @property
    def cards(self) -> tuple[CardView, ...]:
        """Return snapshots of the active round's cards."""
        return self._round.views()

    @property
    def has_shuffled_once(self) -> bool:
        return self._round.has_shuffled_once

    @property
    def pending_phase(self) -> Phase | None:
        """Return the phase whose continuation is waiting to fire, if any."""
        if self._pending is not None and self._pending.pending:
            return self._pending.phase
        return None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def deal(self, requested_count: object = None) -> bool:
        """
        Place the round's cards on the table, face up and locked.

        Args:
            requested_count: Round size; when it differs from the pending
                round, the round is rebuilt before dealing

        Returns:
            True if the cards were dealt
        """
        if self.phase != Phase.IDLE:
            return self._reject("deal")

        if requested_count is not None:
            count = self.factory.clamp(requested_count)
            if count != self._round.size:
                try:
                    cards = self.factory.build_round(count)
                except ConfigurationError as exc:
                    return self._configuration_failed(exc)
                self._round = Round(cards=cards)
                self._announce_round()

        rnd = self._round
        for card in rnd.cards:
            card.slot = card.index
            card.priority = card.index + 1
            card.face_up = True
            card.locked = True
        rnd.placed = True

        self.place_cards()  # Trigger state transition
        self._place_all()
        self.events.emit_new(
            EventType.CARDS_DEALT,
            round_id=rnd.round_id,
            card_count=rnd.size,
            duration=self.timings.deal_duration,
        )
        return True

    def shuffle(self) -> bool:
        """
        Start the shuffle sequence.

        A round shuffles once; any later request only surfaces a notice.

        Returns:
            True if the sequence was started
        """
        rnd = self._round
        if rnd.shuffle_requested or rnd.has_shuffled_once:
            logger.info("Round %s already shuffled, ignoring request", rnd.round_id)
            self.renderer.notify(ALREADY_SHUFFLED_NOTICE)
            self.events.emit_new(
                EventType.ALREADY_SHUFFLED,
                round_id=rnd.round_id,
                message=ALREADY_SHUFFLED_NOTICE,
            )
            return False

        if self.phase != Phase.DEALT:
            return self._reject("shuffle")

        rnd.shuffle_requested = True
        self.events.emit_new(
            EventType.SHUFFLE_STARTED,
            round_id=rnd.round_id,
            message=SHUFFLED_MESSAGE,
        )

        self.start_shuffle()
        rnd.lock_all()
        for card in rnd.cards:
            card.face_up = False
        self._place_all()
        self._schedule(self.timings.flip_duration, self._finish_flip)
        return True

    def on_card_activated(self, card_index: int) -> bool:
        """
        Turn a card face up in response to player input.

        Locked cards, unknown indices and cards already face up are ignored.

        Args:
            card_index: Creation index of the activated card

        Returns:
            True if the card was revealed
        """
        rnd = self._round
        card = rnd.card(card_index) if rnd.placed else None
        if card is None:
            return self._reject(f"reveal card {card_index}")

        if card.locked:
            logger.debug("Card %d is locked during %s", card_index, self.phase)
            self.events.emit_new(
                EventType.CARD_LOCKED,
                round_id=rnd.round_id,
                card_index=card_index,
                phase=self.phase.name,
            )
            return False

        if self.phase not in REVEAL_PHASES:
            return self._reject(f"reveal card {card_index}")

        if card.face_up:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Card {card_index} is already face up",
                phase=self.phase.name,
            )
            return False

        card.face_up = True
        self.turn_card()  # Trigger state transition
        self._place(card)
        self.events.emit_new(
            EventType.CARD_REVEALED,
            round_id=rnd.round_id,
            card_index=card.index,
            slot=card.slot,
            face_value=card.face_value,
        )
        return True

    reveal = on_card_activated

    def restart(self, requested_count: object = None) -> bool:
        """
        Retire the active round and build a fresh one, from any phase.

        Any pending continuation is cancelled first, so nothing scheduled for
        the old round can touch the table afterwards.

        Args:
            requested_count: Size of the new round (defaults to the current size)

        Returns:
            True if a new round replaced the old one
        """
        count = self._round.size if requested_count is None else requested_count
        try:
            cards = self.factory.build_round(count)
        except ConfigurationError as exc:
            return self._configuration_failed(exc)

        old = self._round
        self._cancel_pending()
        self.retire_round()  # Trigger state transition
        logger.info("Retiring round %s during restart", old.round_id)
        self.events.emit_new(EventType.ROUND_RETIRED, round_id=old.round_id)
        old.cards.clear()

        self._round = Round(cards=cards)
        self.reset_round()
        self._announce_round()
        return True

    def close(self) -> None:
        """Cancel the pending phase continuation, leaving the round as it is."""
        if self._pending is not None:
            logger.info("Closing round %s during %s", self._round.round_id, self.phase)
        self._cancel_pending()

    def complete_phase(
        self,
        phase: Phase | str | None = None,
        round_id: str | None = None,
    ) -> bool:
        """
        Advance a timed phase now because its animation has finished.

        Signals naming another phase or round are stale and ignored.

        Args:
            phase: The phase whose animation completed (any pending phase if None)
            round_id: The round the signal belongs to (current round if None)

        Returns:
            True if the pending continuation ran
        """
        pending = self._pending
        if pending is None or not pending.pending:
            return False
        if round_id is not None and round_id != self._round.round_id:
            return False

        if isinstance(phase, str):
            try:
                phase = Phase[phase.strip().upper()]
            except KeyError:
                return False
        if phase is not None and phase != pending.phase:
            return False

        self.scheduler.cancel(pending)
        pending.fired = True
        pending.callback()
        return True

    @property
    def can_deal(self) -> bool:
        """Check if dealing is allowed."""
        return self.phase == Phase.IDLE

    @property
    def can_shuffle(self) -> bool:
        """Check if a shuffle request would start the sequence."""
        rnd = self._round
        return (
            self.phase == Phase.DEALT
            and not rnd.shuffle_requested
            and not rnd.has_shuffled_once
        )

    @property
    def is_locked(self) -> bool:
        """Check if every card currently rejects player input."""
        return all(card.locked for card in self._round.cards)

    def can_reveal(self, card_index: int) -> bool:
        """Check if activating a card would reveal it."""
        card = self._round.card(card_index)
        return (
            card is not None
            and self.phase in REVEAL_PHASES
            and not card.locked
            and not card.face_up
        )

    def _finish_flip(self) -> None:
        """Give the face-down cards a fresh stacking order, then gather them."""
        rnd = self._round
        priorities = random_permutation(rnd.size, self.rng, start=1)
        for card, priority in zip(rnd.cards, priorities):
            card.priority = priority
        self.events.emit_new(EventType.PRIORITIES_ASSIGNED, round_id=rnd.round_id)

        self.gather()
        self._place_all(gathered=True)
        self.events.emit_new(EventType.CARDS_GATHERED, round_id=rnd.round_id)
        self._schedule(self.timings.gather_duration, self._finish_gather)

    def _finish_gather(self) -> None:
        """Deal the gathered cards out to a fresh slot permutation."""
        rnd = self._round
        self.redistribute()
        slots = random_permutation(rnd.size, self.rng)
        for card, slot in zip(rnd.cards, slots):
            card.slot = slot
        self.events.emit_new(EventType.SLOTS_ASSIGNED, round_id=rnd.round_id)

        self._place_all()
        self._schedule(self.timings.redistribute_duration, self._finish_redistribute)

    def _finish_redistribute(self) -> None:
        """Unlock the settled cards for reveal."""
        rnd = self._round
        self.settle()
        rnd.unlock_all()
        rnd.has_shuffled_once = True
        self._place_all()
        self.events.emit_new(EventType.CARDS_UNLOCKED, round_id=rnd.round_id)

    def _schedule(self, delay: float, step: Callable[[], None]) -> None:
        """Schedule the single continuation of the current phase."""
        if self._pending is not None and self._pending.pending:
            raise RuntimeError(f"Continuation for {self._pending.phase} is still pending")

        round_id = self._round.round_id
        phase = self.phase

        def continuation() -> None:
            self._advance(round_id, phase, step)

        self._pending = self.scheduler.schedule(
            delay, continuation, round_id=round_id, phase=phase
        )

    def _advance(self, round_id: str, phase: Phase, step: Callable[[], None]) -> None:
        """Run a continuation only if its round and phase are still current."""
        if round_id != self._round.round_id or phase != self.phase:
            logger.debug("Dropping stale continuation for round %s (%s)", round_id, phase)
            return
        self._pending = None
        step()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None

    def _place(self, card: Card, gathered: bool = False) -> None:
        self.renderer.place_card(
            card.index,
            None if gathered else card.slot,
            card.priority,
            card.face_up,
            card.locked,
        )

    def _place_all(self, gathered: bool = False) -> None:
        for card in self._round.cards:
            self._place(card, gathered=gathered)

    def _announce_round(self) -> None:
        """Tell the renderer and subscribers that a new card set is active."""
        begin_round = getattr(self.renderer, "begin_round", None)
        if begin_round is not None:
            begin_round(self._round.round_id)
        self.events.emit_new(
            EventType.ROUND_CREATED,
            round_id=self._round.round_id,
            card_count=self._round.size,
        )

    def _on_phase_changed(self) -> None:
        logger.debug("Round %s entered %s", self._round.round_id, self.phase)
        self.events.emit_new(
            EventType.PHASE_CHANGED,
            round_id=self._round.round_id,
            phase=self.phase.name,
        )

    def _reject(self, operation: str) -> bool:
        """Turn an operation the current phase does not allow into a no-op."""
        violation = PhaseViolation(operation, self.phase)
        logger.debug("%s", violation)
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=str(violation),
            operation=operation,
            phase=self.phase.name,
        )
        return False

    def _configuration_failed(self, exc: ConfigurationError) -> bool:
        logger.warning("Cannot build a new round: %s", exc)
        self.renderer.notify(str(exc))
        self.events.emit_new(EventType.CONFIGURATION_ERROR, message=str(exc))
        return False
