"""Tests for tweens and layout helpers."""

import pytest

from pygame_ui.core.animation import EaseType, Tween, TweenManager, get_easing
from pygame_ui.utils.math_utils import clamp, gather_x, lerp, lerp_tuple, slot_x


class Target:
    def __init__(self):
        self.value = 0.0
        self.position = (0.0, 0.0)


class TestEasing:
    """Tests for easing functions."""

    @pytest.mark.parametrize("ease_type", list(EaseType))
    def test_endpoints(self, ease_type):
        assert get_easing(ease_type, 0.0) == pytest.approx(0.0)
        assert get_easing(ease_type, 1.0) == pytest.approx(1.0)

    def test_ease_out_back_overshoots(self):
        assert max(get_easing(EaseType.EASE_OUT_BACK, t / 20) for t in range(21)) > 1.0


class TestTween:
    """Tests for the Tween class."""

    def test_float_tween(self):
        target = Target()
        tween = Tween(target, "value", 0.0, 10.0, duration=1.0, ease_type=EaseType.LINEAR)

        assert tween.update(0.5)
        assert target.value == pytest.approx(5.0)
        assert not tween.update(0.5)
        assert target.value == 10.0
        assert tween.completed

    def test_tuple_tween(self):
        target = Target()
        tween = Tween(target, "position", (0.0, 0.0), (10.0, 20.0), 1.0, EaseType.LINEAR)
        tween.update(0.25)
        assert target.position == pytest.approx((2.5, 5.0))

    def test_delay(self):
        target = Target()
        tween = Tween(target, "value", 0.0, 1.0, 1.0, delay=0.5)
        tween.update(0.4)
        assert target.value == 0.0

    def test_lands_exactly_despite_overshoot(self):
        target = Target()
        tween = Tween(target, "value", 0.0, 3.0, 0.2, EaseType.EASE_OUT_BACK)
        tween.update(1.0)
        assert target.value == 3.0

    def test_on_complete_called_once(self):
        calls = []
        tween = Tween(Target(), "value", 0.0, 1.0, 0.1, on_complete=lambda: calls.append(1))
        tween.update(1.0)
        tween.update(1.0)
        assert calls == [1]

    def test_zero_duration(self):
        target = Target()
        Tween(target, "value", 0.0, 4.0, 0.0).update(0.0)
        assert target.value == 4.0


class TestTweenManager:
    """Tests for the TweenManager class."""

    def test_start_value_defaults_to_current(self):
        target = Target()
        target.value = 2.0
        manager = TweenManager()
        tween = manager.create(target, "value", 4.0, 1.0)
        assert tween.start_value == 2.0

    def test_new_tween_replaces_running_one(self):
        target = Target()
        manager = TweenManager()
        manager.create(target, "value", 4.0, 1.0)
        manager.create(target, "value", 8.0, 1.0)
        assert len(manager.tweens) == 1
        assert manager.tweens[0].end_value == 8.0

    def test_groups(self):
        manager = TweenManager()
        first, second = Target(), Target()
        manager.create(first, "value", 1.0, 0.5, group="gather")
        manager.create(second, "value", 1.0, 1.0, group="gather")

        manager.update(0.6)
        assert manager.is_group_animating("gather")
        manager.update(0.6)
        assert not manager.is_group_animating("gather")
        assert not manager.is_animating

    def test_cancel_for(self):
        target = Target()
        manager = TweenManager()
        manager.create(target, "value", 1.0, 1.0)
        manager.create(target, "position", (1.0, 1.0), 1.0)
        manager.cancel_for(target, "value")
        assert [t.property_name for t in manager.tweens] == ["position"]
        manager.cancel_for(target)
        assert manager.tweens == []

    def test_on_complete_may_start_new_tween(self):
        target = Target()
        manager = TweenManager()
        manager.create(
            target,
            "value",
            1.0,
            0.1,
            on_complete=lambda: manager.create(target, "position", (5.0, 5.0), 1.0),
        )
        manager.update(0.2)
        assert [t.property_name for t in manager.tweens] == ["position"]


class TestMathUtils:
    """Tests for interpolation and slot layout."""

    def test_lerp(self):
        assert lerp(0, 10, 0.3) == pytest.approx(3.0)
        assert lerp_tuple((0, 0), (10, 20), 0.5) == (5.0, 10.0)

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0

    def test_slots_are_evenly_spaced_and_centered(self):
        xs = [slot_x(i, 3, 1280, 120) for i in range(3)]
        assert xs == [520.0, 640.0, 760.0]

    def test_gather_point_is_midpoint(self):
        assert gather_x(4, 1280, 120) == pytest.approx(640.0)
        left, right = slot_x(0, 5, 1000, 100), slot_x(4, 5, 1000, 100)
        assert gather_x(5, 1000, 100) == pytest.approx((left + right) / 2)
