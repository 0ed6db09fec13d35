"""Table API endpoints."""

import logging
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    ActionResponse,
    AdvanceRequest,
    DealRequest,
    NewTableRequest,
    NewTableResponse,
    PhaseCompleteRequest,
    RestartRequest,
    RevealRequest,
    TableStateResponse,
)
from api.session import extract_session_id, get_table_store
from api.table import TableSession, action_response, new_table, table_state_response
from core.game import ManualScheduler

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_table(session_id: str) -> TableSession:
    """Get the table for a session, or 404."""
    table = None
    if extract_session_id(session_id) is not None:
        table = get_table_store().get(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return table


@router.post("/new")
async def new_game(
    request: NewTableRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewTableResponse:
    """Open a new table, reusing the session if a valid one is supplied."""
    store = get_table_store()
    table = new_table(card_count=request.card_count if request else None)

    if session_id is not None and extract_session_id(session_id) is not None:
        previous = store.get(session_id)
        if previous is not None:
            previous.sequencer.close()
        store.put(session_id, table)
    else:
        session_id = store.open(table)
    logger.info("Opened table with round %s", table.sequencer.round_id)

    return NewTableResponse(session_id=session_id, state=table_state_response(table.sequencer))


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Get current table state."""
    table = _get_table(session_id)
    return table_state_response(table.sequencer)


@router.post("/deal")
async def deal(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
    request: DealRequest | None = None,
) -> ActionResponse:
    """Deal the round's cards face up."""
    table = _get_table(session_id)
    accepted = table.sequencer.deal(request.card_count if request else None)
    return action_response(table, accepted)


@router.post("/shuffle")
async def shuffle(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ActionResponse:
    """Start the shuffle sequence."""
    table = _get_table(session_id)
    accepted = table.sequencer.shuffle()
    return action_response(table, accepted)


@router.post("/advance")
async def advance(
    request: AdvanceRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ActionResponse:
    """Move the table clock forward by the client's elapsed animation time."""
    table = _get_table(session_id)
    scheduler = table.scheduler
    if not isinstance(scheduler, ManualScheduler):
        raise HTTPException(status_code=409, detail="Table clock is not client driven")

    ran = scheduler.advance(request.elapsed)
    return action_response(table, ran > 0)


@router.post("/phase-complete")
async def phase_complete(
    request: PhaseCompleteRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ActionResponse:
    """Signal that the client finished animating a phase."""
    table = _get_table(session_id)
    accepted = table.sequencer.complete_phase(request.phase, round_id=request.round_id)
    return action_response(table, accepted)


@router.post("/reveal")
async def reveal(
    request: RevealRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ActionResponse:
    """Turn a card face up if it is unlocked."""
    table = _get_table(session_id)
    accepted = table.sequencer.on_card_activated(request.card_index)
    return action_response(table, accepted)


@router.post("/restart")
async def restart(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
    request: RestartRequest | None = None,
) -> ActionResponse:
    """Retire the round and build a new one."""
    table = _get_table(session_id)
    accepted = table.sequencer.restart(request.card_count if request else None)
    return action_response(table, accepted)
