"""Pytest fixtures for shuffle table tests."""

import pytest
from random import Random

from config import PhaseTimings
from core.cards import DeckFactory
from core.game import ManualScheduler, RecordingRenderer, ShuffleSequencer


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def factory(rng):
    """Deck factory over the default five-face pool."""
    return DeckFactory(rng=rng)


@pytest.fixture
def small_factory(rng):
    """Deck factory over exactly four faces, as in the end-to-end scenario."""
    return DeckFactory(pool=("A", "K", "Q", "J"), min_cards=3, max_cards=4, rng=rng)


@pytest.fixture
def scheduler():
    """Manual clock starting at zero."""
    return ManualScheduler()


@pytest.fixture
def renderer():
    """Renderer that records every placement and notice."""
    return RecordingRenderer()


@pytest.fixture
def timings():
    """Default phase timings."""
    return PhaseTimings()


@pytest.fixture
def sequencer(renderer, factory, scheduler, timings):
    """A three-card table, idle and ready to deal."""
    return ShuffleSequencer(
        renderer=renderer,
        factory=factory,
        scheduler=scheduler,
        timings=timings,
        card_count=3,
    )


@pytest.fixture
def settled_sequencer(sequencer, scheduler):
    """A table that has been dealt and fully shuffled."""
    sequencer.deal()
    sequencer.shuffle()
    scheduler.run_all()
    return sequencer
