"""Tests for Card, clamping and the DeckFactory."""

import pytest
from random import Random

from hypothesis import given, strategies as st

from core.cards import (
    Card,
    DeckFactory,
    clamp_card_count,
    distinct_faces,
    random_permutation,
    validate_card_count,
)
from core.errors import ConfigurationError, InvalidCardCount

card_counts = st.integers(min_value=3, max_value=5)
seeds = st.integers(min_value=0, max_value=2**32 - 1)


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """A new card sits at its own slot, face down and locked."""
        card = Card(2, "Q")
        assert card.index == 2
        assert card.face_value == "Q"
        assert card.slot == 2
        assert card.priority is None
        assert not card.face_up
        assert card.locked

    def test_identity_is_read_only(self):
        """Index and face value cannot change after creation."""
        card = Card(0, "A")
        with pytest.raises(AttributeError):
            card.index = 3
        with pytest.raises(AttributeError):
            card.face_value = "K"

    def test_mutable_fields(self):
        """Slot, priority, face_up and locked are mutable in place."""
        card = Card(0, "A")
        card.slot = 4
        card.priority = 2
        card.face_up = True
        card.locked = False
        assert (card.slot, card.priority, card.face_up, card.locked) == (4, 2, True, False)

    def test_view_is_snapshot(self):
        """A view does not follow later mutations."""
        card = Card(1, "K")
        view = card.view()
        card.slot = 0
        assert view.slot == 1
        assert view.face_value == "K"

    def test_str_hides_face_down_value(self):
        card = Card(0, "A")
        assert str(card) == "??"
        card.face_up = True
        assert str(card) == "A"


class TestClampCardCount:
    """Tests for clamp_card_count."""

    @pytest.mark.parametrize(
        "requested, expected",
        [
            (3, 3),
            (4, 4),
            (5, 5),
            (7, 5),
            (2, 3),
            (0, 3),
            (-4, 3),
            ("4", 4),
            (" 5 ", 5),
            ("abc", 3),
            ("", 3),
            (None, 3),
            (4.9, 4),
            ("4.7", 4),
            ("4abc", 4),
            ("-2", 3),
            ([4], 3),
            ({"n": 4}, 3),
        ],
    )
    def test_clamping(self, requested, expected):
        assert clamp_card_count(requested) == expected

    def test_custom_range(self):
        assert clamp_card_count(10, min_cards=2, max_cards=8) == 8
        assert clamp_card_count(1, min_cards=2, max_cards=8) == 2

    def test_validate_accepts_in_range(self):
        assert validate_card_count(4) == 4

    @pytest.mark.parametrize("requested", [2, 6, "4", None, True])
    def test_validate_rejects(self, requested):
        with pytest.raises(InvalidCardCount) as exc_info:
            validate_card_count(requested)
        assert exc_info.value.requested == requested
        assert exc_info.value.min_cards == 3
        assert exc_info.value.max_cards == 5


class TestHelpers:
    """Tests for pool and permutation helpers."""

    def test_distinct_faces_keeps_first_seen_order(self):
        assert distinct_faces(["A", "K", "A", "Q", "K"]) == ["A", "K", "Q"]

    def test_random_permutation_is_permutation(self, rng):
        values = random_permutation(5, rng)
        assert sorted(values) == [0, 1, 2, 3, 4]

    def test_random_permutation_with_start(self, rng):
        values = random_permutation(4, rng, start=1)
        assert sorted(values) == [1, 2, 3, 4]

    def test_random_permutation_is_reproducible(self):
        assert random_permutation(5, Random(7)) == random_permutation(5, Random(7))


class TestDeckFactory:
    """Tests for the DeckFactory class."""

    def test_build_round_default_size(self, factory):
        cards = factory.build_round(3)
        assert [card.index for card in cards] == [0, 1, 2]
        assert [card.slot for card in cards] == [0, 1, 2]

    def test_build_round_clamps(self, factory):
        assert len(factory.build_round(9)) == 5
        assert len(factory.build_round("x")) == 3

    def test_cards_start_face_down_and_locked(self, factory):
        for card in factory.build_round(4):
            assert not card.face_up
            assert card.locked
            assert card.priority is None

    def test_faces_come_from_pool(self, factory):
        cards = factory.build_round(5)
        assert sorted(card.face_value for card in cards) == sorted(factory.pool)

    def test_duplicate_pool_entries_are_ignored(self, rng):
        factory = DeckFactory(pool=("A", "A", "K", "Q", "J"), rng=rng)
        cards = factory.build_round(4)
        assert sorted(card.face_value for card in cards) == ["A", "J", "K", "Q"]

    def test_pool_too_small(self, rng):
        factory = DeckFactory(pool=("A", "A", "K"), rng=rng)
        with pytest.raises(ConfigurationError):
            factory.build_round(3)

    def test_pool_override(self, factory):
        cards = factory.build_round(3, pool=("X", "Y", "Z"))
        assert sorted(card.face_value for card in cards) == ["X", "Y", "Z"]

    def test_invalid_range(self):
        with pytest.raises(ConfigurationError):
            DeckFactory(min_cards=5, max_cards=3)
        with pytest.raises(ConfigurationError):
            DeckFactory(min_cards=0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            DeckFactory(min_cards=6, max_cards=2)

    def test_seeded_factories_agree(self):
        first = DeckFactory(rng=Random(3)).build_round(5)
        second = DeckFactory(rng=Random(3)).build_round(5)
        assert [c.face_value for c in first] == [c.face_value for c in second]

    @given(count=card_counts, seed=seeds)
    def test_distinct_faces_for_every_count(self, count, seed):
        """For every supported count the round has that many distinct faces."""
        cards = DeckFactory(rng=Random(seed)).build_round(count)
        assert len(cards) == count
        assert len({card.face_value for card in cards}) == count
