"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Any, Literal


# Any shape is accepted here; the deck factory clamps it into range
CardCount = Any


# Request schemas
class NewTableRequest(BaseModel):
    """Request to open a new table."""

    card_count: CardCount = Field(default=None, description="Cards in the first round")


class DealRequest(BaseModel):
    """Request to deal the round's cards."""

    card_count: CardCount = Field(
        default=None,
        description="Cards to deal; clamped into the supported range",
    )


class RevealRequest(BaseModel):
    """Request to turn a card over."""

    card_index: int = Field(..., ge=0, description="Creation index of the card")


class RestartRequest(BaseModel):
    """Request to retire the round and build a new one."""

    card_count: CardCount = None


class AdvanceRequest(BaseModel):
    """Report elapsed animation time to the table clock."""

    elapsed: float = Field(..., ge=0, le=60, description="Seconds elapsed")


class PhaseCompleteRequest(BaseModel):
    """Signal that the animation for a phase has finished."""

    phase: Literal["flipping_down", "gathering", "redistributing"]
    round_id: str | None = None


# Response schemas
class CardResponse(BaseModel):
    """
    Card representation.

    ``face_value`` is only sent once the card is face up.
    """

    index: int
    slot: int
    priority: int | None
    face_up: bool
    locked: bool
    face_value: str | None = None


class PlacementResponse(BaseModel):
    """One renderer placement; ``slot`` is null at the gather point."""

    round_id: str
    card_index: int
    slot: int | None
    priority: int | None
    face_up: bool
    locked: bool


class TableStateResponse(BaseModel):
    """Current table state."""

    round_id: str
    phase: str
    pending_phase: str | None
    card_count: int
    has_shuffled_once: bool
    cards: list[CardResponse]
    can_deal: bool
    can_shuffle: bool


class ActionResponse(BaseModel):
    """Result of a table action with the renderer output it produced."""

    accepted: bool
    state: TableStateResponse
    placements: list[PlacementResponse] = Field(default_factory=list)
    notices: list[str] = Field(default_factory=list)


class NewTableResponse(BaseModel):
    """A freshly opened table."""

    session_id: str
    state: TableStateResponse
