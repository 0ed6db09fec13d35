"""A live table: one sequencer plus the renderer and clock that drive it."""

from dataclasses import dataclass
from random import Random

from api.schemas import (
    ActionResponse,
    CardResponse,
    PlacementResponse,
    TableStateResponse,
)
from config import config
from core.game import ManualScheduler, RecordingRenderer, Scheduler, ShuffleSequencer
from core.game.renderer import Placement


@dataclass
class TableSession:
    """Sequencer with a recording renderer; placements are drained per request."""

    sequencer: ShuffleSequencer
    renderer: RecordingRenderer

    @property
    def scheduler(self) -> Scheduler:
        return self.sequencer.scheduler


def new_table(
    card_count: object = None,
    scheduler: Scheduler | None = None,
    rng: Random | None = None,
    renderer: RecordingRenderer | None = None,
) -> TableSession:
    """
    Open a table with a freshly built round.

    Args:
        card_count: Size of the first round (config default if None)
        scheduler: Phase clock (a manual clock advanced by the client if None)
        rng: Random number generator (seeded from config if None)
        renderer: Recorder for placements and notices (a fresh one if None)
    """
    renderer = renderer or RecordingRenderer()
    sequencer = ShuffleSequencer(
        renderer=renderer,
        scheduler=scheduler or ManualScheduler(),
        card_count=card_count,
        rng=rng or Random(config.shuffle.seed),
    )
    return TableSession(sequencer=sequencer, renderer=renderer)


def card_to_response(card) -> CardResponse:
    """Convert a CardView to CardResponse, hiding face-down values."""
    return CardResponse(
        index=card.index,
        slot=card.slot,
        priority=card.priority,
        face_up=card.face_up,
        locked=card.locked,
        face_value=card.face_value if card.face_up else None,
    )


def placement_to_response(placement: Placement) -> PlacementResponse:
    """Convert a Placement to PlacementResponse."""
    return PlacementResponse(
        round_id=placement.round_id,
        card_index=placement.card_index,
        slot=placement.slot,
        priority=placement.priority,
        face_up=placement.face_up,
        locked=placement.locked,
    )


def table_state_response(sequencer: ShuffleSequencer) -> TableStateResponse:
    """Convert table state to response."""
    pending = sequencer.pending_phase
    return TableStateResponse(
        round_id=sequencer.round_id,
        phase=sequencer.phase.name,
        pending_phase=pending.name if pending else None,
        card_count=sequencer.round.size,
        has_shuffled_once=sequencer.has_shuffled_once,
        cards=[card_to_response(c) for c in sequencer.cards],
        can_deal=sequencer.can_deal,
        can_shuffle=sequencer.can_shuffle,
    )


def action_response(table: TableSession, accepted: bool) -> ActionResponse:
    """Build an action response, draining the renderer output it produced."""
    placements, notices = table.renderer.drain()
    return ActionResponse(
        accepted=accepted,
        state=table_state_response(table.sequencer),
        placements=[placement_to_response(p) for p in placements],
        notices=notices,
    )
