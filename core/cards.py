"""Card state and the deck factory that builds a round's cards."""

import re
from dataclasses import dataclass
from random import Random
from typing import Iterable, Sequence

from core.errors import ConfigurationError, InvalidCardCount

DEFAULT_FACE_POOL: tuple[str, ...] = ("A", "K", "Q", "J", "10")
MIN_CARDS = 3
MAX_CARDS = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class CardView:
    """Immutable snapshot of a card, handed to renderers and the API."""

    index: int
    face_value: str
    slot: int
    priority: int | None
    face_up: bool
    locked: bool


class Card:
    """
    A single table card.

    ``index`` and ``face_value`` are fixed for the card's lifetime; the
    sequencer mutates ``slot``, ``priority``, ``face_up`` and ``locked`` in
    place as the round moves through its phases.
    """

    __slots__ = ("_index", "_face_value", "slot", "priority", "face_up", "locked")

    def __init__(
        self,
        index: int,
        face_value: str,
        slot: int | None = None,
        priority: int | None = None,
        face_up: bool = False,
        locked: bool = True,
    ) -> None:
        self._index = index
        self._face_value = face_value
        self.slot = index if slot is None else slot
        self.priority = priority
        self.face_up = face_up
        self.locked = locked

    @property
    def index(self) -> int:
        """Stable creation index (0..N-1)."""
        return self._index

    @property
    def face_value(self) -> str:
        """The symbol printed on the card."""
        return self._face_value

    def view(self) -> CardView:
        """Return an immutable snapshot of the card."""
        return CardView(
            index=self._index,
            face_value=self._face_value,
            slot=self.slot,
            priority=self.priority,
            face_up=self.face_up,
            locked=self.locked,
        )

    def __str__(self) -> str:
        return self._face_value if self.face_up else "??"

    def __repr__(self) -> str:
        return (
            f"Card({self._index}, {self._face_value!r}, slot={self.slot}, "
            f"priority={self.priority}, face_up={self.face_up}, locked={self.locked})"
        )


def clamp_card_count(
    requested: object,
    min_cards: int = MIN_CARDS,
    max_cards: int = MAX_CARDS,
) -> int:
    """
    Coerce a requested card count into ``[min_cards, max_cards]``.

    Missing, non-numeric or zero input falls back to ``min_cards``. Strings are
    read up to their first non-digit, so ``"4.7"`` and ``"4abc"`` both give 4,
    and floats are truncated.

    Args:
        requested: Raw count, typically straight from user input
        min_cards: Smallest supported count
        max_cards: Largest supported count

    Returns:
        A count inside the supported range
    """
    try:
        if isinstance(requested, str):
            match = _LEADING_INT.match(requested)
            count = int(match.group(1)) if match else 0
        elif isinstance(requested, bool) or requested is None:
            count = 0
        else:
            count = int(requested)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        count = 0

    if not count or count < min_cards:
        return min_cards
    if count > max_cards:
        return max_cards
    return count


def validate_card_count(
    requested: int,
    min_cards: int = MIN_CARDS,
    max_cards: int = MAX_CARDS,
) -> int:
    """Strict counterpart of :func:`clamp_card_count`: reject instead of clamping."""
    if isinstance(requested, bool) or not isinstance(requested, int):
        raise InvalidCardCount(requested, min_cards, max_cards)
    if not min_cards <= requested <= max_cards:
        raise InvalidCardCount(requested, min_cards, max_cards)
    return requested


def distinct_faces(pool: Iterable[str]) -> list[str]:
    """Drop repeated symbols from a pool, keeping first-seen order."""
    return list(dict.fromkeys(pool))


def random_permutation(size: int, rng: Random, start: int = 0) -> list[int]:
    """Return a uniformly random ordering of ``start .. start + size - 1``."""
    values = list(range(start, start + size))
    rng.shuffle(values)
    return values


class DeckFactory:
    """Builds the card set for a new round."""

    def __init__(
        self,
        pool: Sequence[str] = DEFAULT_FACE_POOL,
        min_cards: int = MIN_CARDS,
        max_cards: int = MAX_CARDS,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize the factory.

        Args:
            pool: Face values to draw from (repeats are ignored)
            min_cards: Smallest supported round size
            max_cards: Largest supported round size
            rng: Random number generator for reproducible rounds
        """
        if min_cards < 1:
            raise ConfigurationError("A round needs at least one card")
        if min_cards > max_cards:
            raise ConfigurationError(
                f"Minimum card count {min_cards} exceeds maximum {max_cards}"
            )

        self._pool = tuple(pool)
        self._min_cards = min_cards
        self._max_cards = max_cards
        self._rng = rng or Random()

    @property
    def pool(self) -> tuple[str, ...]:
        """Return the configured face pool."""
        return self._pool

    @property
    def min_cards(self) -> int:
        return self._min_cards

    @property
    def max_cards(self) -> int:
        return self._max_cards

    @property
    def rng(self) -> Random:
        """Return the shared random number generator."""
        return self._rng

    def clamp(self, requested: object) -> int:
        """Clamp a requested count into this factory's range."""
        return clamp_card_count(requested, self._min_cards, self._max_cards)

    def build_round(
        self,
        requested_count: object = None,
        pool: Sequence[str] | None = None,
    ) -> list[Card]:
        """
        Build the cards for a new round.

        Args:
            requested_count: Desired number of cards (clamped into range)
            pool: Face values to draw from (defaults to the factory pool)

        Returns:
            Cards 0..N-1, each with a distinct face value, placed at
            ``slot == index``, face down and locked

        Raises:
            ConfigurationError: If the pool has fewer distinct faces than needed
        """
        count = self.clamp(requested_count)
        faces = distinct_faces(self._pool if pool is None else pool)

        if len(faces) < count:
            raise ConfigurationError(
                f"Need {count} distinct face values, pool only has {len(faces)}"
            )

        self._rng.shuffle(faces)
        return [Card(index=i, face_value=faces[i]) for i in range(count)]
