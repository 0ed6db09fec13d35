"""Error taxonomy for the shuffle engine."""


class ShufflePeekError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ShufflePeekError, ValueError):
    """Raised when a round cannot be built from the configured face pool or range."""


class InvalidCardCount(ShufflePeekError, ValueError):
    """Raised by strict validation when a card count is outside the supported range.

    The engine itself never raises this; it clamps instead.
    """

    def __init__(self, requested: object, min_cards: int, max_cards: int) -> None:
        super().__init__(
            f"Card count {requested!r} is outside the supported range {min_cards}-{max_cards}"
        )
        self.requested = requested
        self.min_cards = min_cards
        self.max_cards = max_cards


class PhaseViolation(ShufflePeekError):
    """An operation was requested in a phase that defines no transition for it.

    The sequencer converts this into a no-op; it never reaches the renderer.
    """

    def __init__(self, operation: str, phase: object) -> None:
        super().__init__(f"Cannot {operation} during {phase}")
        self.operation = operation
        self.phase = phase


class InvariantViolation(ShufflePeekError, AssertionError):
    """Slot or priority values of a round are not a permutation."""
