"""Shuffle phase enumeration."""

from enum import Enum, auto


class Phase(Enum):
    """
    Shuffle sequencer states.

    Flow: IDLE → DEALT → FLIPPING_DOWN → GATHERING → REDISTRIBUTING → SETTLED → REVEALED
    RESTARTING is reachable from every state and leads back to a fresh IDLE.
    """

    # Round built, nothing on the table
    IDLE = auto()

    # Cards placed face up at their creation slots
    DEALT = auto()

    # Shuffle sequence
    FLIPPING_DOWN = auto()
    GATHERING = auto()
    REDISTRIBUTING = auto()

    # Cards unlocked, waiting for the player
    SETTLED = auto()

    # At least one card turned over
    REVEALED = auto()

    # Old round being discarded
    RESTARTING = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Phases that run on a timer and advance without player input
TIMED_PHASES: tuple[Phase, ...] = (
    Phase.FLIPPING_DOWN,
    Phase.GATHERING,
    Phase.REDISTRIBUTING,
)

# Phases in which a card may be turned over
REVEAL_PHASES: tuple[Phase, ...] = (Phase.SETTLED, Phase.REVEALED)

# Valid state transitions
VALID_TRANSITIONS: dict[Phase, list[Phase]] = {
    Phase.IDLE: [Phase.DEALT, Phase.RESTARTING],
    Phase.DEALT: [Phase.FLIPPING_DOWN, Phase.RESTARTING],
    Phase.FLIPPING_DOWN: [Phase.GATHERING, Phase.RESTARTING],
    Phase.GATHERING: [Phase.REDISTRIBUTING, Phase.RESTARTING],
    Phase.REDISTRIBUTING: [Phase.SETTLED, Phase.RESTARTING],
    Phase.SETTLED: [Phase.REVEALED, Phase.RESTARTING],
    Phase.REVEALED: [Phase.REVEALED, Phase.RESTARTING],
    Phase.RESTARTING: [Phase.IDLE],
}


def is_valid_transition(from_phase: Phase, to_phase: Phase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


def next_timed_phase(phase: Phase) -> Phase | None:
    """Return the phase a timed phase advances into, or None for untimed phases."""
    if phase not in TIMED_PHASES:
        return None
    order = [*TIMED_PHASES, Phase.SETTLED]
    return order[order.index(phase) + 1]
