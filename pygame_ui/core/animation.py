"""Animation system with easing functions and tweening."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from pygame_ui.utils.math_utils import lerp, lerp_tuple


class EaseType(Enum):
    """Available easing function types."""

    LINEAR = auto()
    EASE_IN = auto()
    EASE_OUT = auto()
    EASE_IN_OUT = auto()
    EASE_OUT_BACK = auto()


def ease_linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease in - accelerates from zero."""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease out - decelerates to zero."""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease in/out - accelerates then decelerates."""
    if t < 0.5:
        return 2 * t * t
    return 1 - pow(-2 * t + 2, 2) / 2


def ease_out_back(t: float, overshoot: float = 1.70158) -> float:
    """Ease out with overshoot - cards slide slightly past their slot then settle."""
    c3 = overshoot + 1
    return 1 + c3 * pow(t - 1, 3) + overshoot * pow(t - 1, 2)


EASE_FUNCTIONS: Dict[EaseType, Callable[[float], float]] = {
    EaseType.LINEAR: ease_linear,
    EaseType.EASE_IN: ease_in_quad,
    EaseType.EASE_OUT: ease_out_quad,
    EaseType.EASE_IN_OUT: ease_in_out_quad,
    EaseType.EASE_OUT_BACK: ease_out_back,
}


def get_easing(ease_type: EaseType, t: float) -> float:
    """Get eased value for a given ease type and progress (0.0 to 1.0)."""
    return EASE_FUNCTIONS[ease_type](t)


@dataclass
class Tween:
    """A single property animation from start to end value.

    Supports animating floats or tuples (positions). ``group`` tags tweens
    started together so the caller can tell when a whole batch has finished.
    """

    target: Any
    property_name: str
    start_value: Any
    end_value: Any
    duration: float
    ease_type: EaseType = EaseType.EASE_OUT
    delay: float = 0.0
    group: Optional[str] = None
    on_complete: Optional[Callable[[], None]] = None

    elapsed: float = field(default=0.0, init=False)
    completed: bool = field(default=False, init=False)

    def update(self, dt: float) -> bool:
        """Advance the tween.

        Args:
            dt: Delta time in seconds

        Returns:
            True if still animating, False if completed
        """
        if self.completed:
            return False

        self.elapsed += dt
        if self.elapsed < self.delay:
            return True

        active_time = self.elapsed - self.delay
        progress = min(1.0, active_time / self.duration) if self.duration > 0 else 1.0
        eased = get_easing(self.ease_type, progress)

        if isinstance(self.start_value, tuple):
            value = lerp_tuple(self.start_value, self.end_value, eased)
        else:
            value = lerp(self.start_value, self.end_value, eased)
        setattr(self.target, self.property_name, value)

        if progress >= 1.0:
            # Land exactly on the end value, whatever the easing overshoot
            setattr(self.target, self.property_name, self.end_value)
            self.completed = True
            if self.on_complete:
                self.on_complete()
            return False

        return True


class TweenManager:
    """Manages multiple concurrent tweens."""

    def __init__(self) -> None:
        self.tweens: List[Tween] = []

    def create(
        self,
        target: Any,
        property_name: str,
        end_value: Any,
        duration: float,
        ease_type: EaseType = EaseType.EASE_OUT,
        start_value: Any = None,
        delay: float = 0.0,
        group: Optional[str] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> Tween:
        """Create and add a new tween.

        Any running tween on the same target property is replaced.

        Args:
            target: Object to animate
            property_name: Property/attribute name
            end_value: Target value
            duration: Animation duration in seconds
            ease_type: Easing function type
            start_value: Starting value (None = current value)
            delay: Delay before starting
            group: Batch tag, see :meth:`is_group_animating`
            on_complete: Callback when animation completes

        Returns:
            The created tween
        """
        self.cancel_for(target, property_name)
        if start_value is None:
            start_value = getattr(target, property_name)

        tween = Tween(
            target=target,
            property_name=property_name,
            start_value=start_value,
            end_value=end_value,
            duration=duration,
            ease_type=ease_type,
            delay=delay,
            group=group,
            on_complete=on_complete,
        )
        self.tweens.append(tween)
        return tween

    def update(self, dt: float) -> None:
        """Update all tweens and drop the completed ones."""
        for tween in list(self.tweens):
            tween.update(dt)
        self.tweens = [tween for tween in self.tweens if not tween.completed]

    def clear(self) -> None:
        """Remove all tweens."""
        self.tweens.clear()

    def cancel_for(self, target: Any, property_name: Optional[str] = None) -> None:
        """Cancel tweens for a specific target (all properties if None)."""
        self.tweens = [
            tween
            for tween in self.tweens
            if not (
                tween.target is target
                and (property_name is None or tween.property_name == property_name)
            )
        ]

    def is_group_animating(self, group: str) -> bool:
        """Check if any tween of a batch is still running."""
        return any(tween.group == group for tween in self.tweens)

    @property
    def is_animating(self) -> bool:
        """Check if any tweens are active."""
        return len(self.tweens) > 0
