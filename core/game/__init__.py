"""Shuffle sequencing and phase management."""

from core.game.events import GameEvent, EventType
from core.game.state import Phase
from core.game.round import Round
from core.game.renderer import Renderer, RecordingRenderer, NullRenderer, Placement
from core.game.scheduler import Scheduler, ManualScheduler, AsyncioScheduler
from core.game.engine import ShuffleSequencer

__all__ = [
    "GameEvent",
    "EventType",
    "Phase",
    "Round",
    "Renderer",
    "RecordingRenderer",
    "NullRenderer",
    "Placement",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "ShuffleSequencer",
]
