"""Core shuffle engine - 100% UI-agnostic."""

from core.cards import Card, CardView, DeckFactory, clamp_card_count
from core.errors import (
    ConfigurationError,
    InvalidCardCount,
    InvariantViolation,
    PhaseViolation,
    ShufflePeekError,
)

__all__ = [
    "Card",
    "CardView",
    "DeckFactory",
    "clamp_card_count",
    "ConfigurationError",
    "InvalidCardCount",
    "InvariantViolation",
    "PhaseViolation",
    "ShufflePeekError",
]
