"""The active round: one card set plus its per-round flags."""

from dataclasses import dataclass, field
from uuid import uuid4

from core.cards import Card, CardView
from core.errors import InvariantViolation


def _new_round_id() -> str:
    return uuid4().hex


@dataclass
class Round:
    """
    One play-through, from deal to restart.

    Owned exclusively by the sequencer; renderers only ever see ``CardView``
    snapshots.
    """

    cards: list[Card]
    round_id: str = field(default_factory=_new_round_id)
    placed: bool = False
    shuffle_requested: bool = False
    has_shuffled_once: bool = False

    @property
    def size(self) -> int:
        """Return the number of cards in the round."""
        return len(self.cards)

    def card(self, index: object) -> Card | None:
        """Get a card by creation index; anything but a plain int matches nothing."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.cards):
            return self.cards[index]
        return None

    def card_at_slot(self, slot: int) -> Card | None:
        """Get the card currently occupying a slot."""
        for card in self.cards:
            if card.slot == slot:
                return card
        return None

    def slots(self) -> list[int]:
        """Return each card's slot, in creation order."""
        return [card.slot for card in self.cards]

    def priorities(self) -> list[int | None]:
        """Return each card's priority, in creation order."""
        return [card.priority for card in self.cards]

    def views(self) -> tuple[CardView, ...]:
        """Return immutable snapshots of every card."""
        return tuple(card.view() for card in self.cards)

    def lock_all(self) -> None:
        for card in self.cards:
            card.locked = True

    def unlock_all(self) -> None:
        for card in self.cards:
            card.locked = False

    def check_invariants(self) -> None:
        """
        Verify slot and priority sets.

        Raises:
            InvariantViolation: If slots are not a permutation of 0..N-1, or
                assigned priorities are not a permutation of 1..N
        """
        n = self.size
        if sorted(self.slots()) != list(range(n)):
            raise InvariantViolation(f"Slots {self.slots()} are not a permutation of 0..{n - 1}")

        priorities = self.priorities()
        if all(p is None for p in priorities):
            return
        if sorted(p or 0 for p in priorities) != list(range(1, n + 1)):
            raise InvariantViolation(f"Priorities {priorities} are not a permutation of 1..{n}")

    def __len__(self) -> int:
        return len(self.cards)
