"""Renderer contract consumed by the shuffle sequencer."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Renderer(Protocol):
    """
    Visual collaborator of the sequencer.

    The sequencer calls ``place_card`` once per card when the cards are dealt
    and at every later phase boundary, and ``notify`` for user-facing notices.
    A ``slot`` of ``None`` means the card sits at the shared gather point.

    Renderers may also define ``begin_round(round_id)``; when present the
    sequencer calls it whenever a new card set replaces the old one, before
    any card of the new round is placed.
    """

    def place_card(
        self,
        card_index: int,
        slot: int | None,
        priority: int | None,
        face_up: bool,
        locked: bool,
    ) -> None:
        ...

    def notify(self, message: str) -> None:
        ...


@dataclass(frozen=True, slots=True)
class Placement:
    """One recorded ``place_card`` call."""

    round_id: str
    card_index: int
    slot: int | None
    priority: int | None
    face_up: bool
    locked: bool

    @property
    def at_gather_point(self) -> bool:
        return self.slot is None


class NullRenderer:
    """Renderer that discards everything."""

    def place_card(
        self,
        card_index: int,
        slot: int | None,
        priority: int | None,
        face_up: bool,
        locked: bool,
    ) -> None:
        pass

    def notify(self, message: str) -> None:
        pass


class RecordingRenderer:
    """
    Renderer that records every call.

    Each placement is tagged with the round announced through
    ``begin_round`` so it can be traced back to the round it belongs to.
    """

    def __init__(self) -> None:
        self.round_id: str = ""
        self.placements: list[Placement] = []
        self.notices: list[str] = []

    def place_card(
        self,
        card_index: int,
        slot: int | None,
        priority: int | None,
        face_up: bool,
        locked: bool,
    ) -> None:
        self.placements.append(
            Placement(
                round_id=self.round_id,
                card_index=card_index,
                slot=slot,
                priority=priority,
                face_up=face_up,
                locked=locked,
            )
        )

    def begin_round(self, round_id: str) -> None:
        self.round_id = round_id

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def drain(self) -> tuple[list[Placement], list[str]]:
        """Return and clear the recorded placements and notices."""
        placements, notices = self.placements, self.notices
        self.placements, self.notices = [], []
        return placements, notices

    def placements_for(self, round_id: str) -> list[Placement]:
        """Return the placements recorded for one round."""
        return [p for p in self.placements if p.round_id == round_id]
