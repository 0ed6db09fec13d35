"""Math utility functions for animations and layout."""

from typing import Tuple, Union

Number = Union[int, float]


def lerp(start: Number, end: Number, t: float) -> float:
    """Linear interpolation between start and end.

    Args:
        start: Starting value
        end: Ending value
        t: Interpolation factor (0.0 to 1.0)

    Returns:
        Interpolated value
    """
    return start + (end - start) * t


def lerp_tuple(
    start: Tuple[Number, ...], end: Tuple[Number, ...], t: float
) -> Tuple[float, ...]:
    """Linear interpolation between two tuples (e.g., positions, colors)."""
    return tuple(lerp(s, e, t) for s, e in zip(start, end))


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))


def slot_x(slot: int, card_count: int, screen_width: int, spacing: int) -> float:
    """Horizontal center of a slot, with the row of slots centered on screen.

    Args:
        slot: Slot index (0 is leftmost)
        card_count: Number of slots in the row
        screen_width: Width of the screen in pixels
        spacing: Distance between neighbouring slot centers

    Returns:
        X coordinate of the slot center
    """
    row_width = (card_count - 1) * spacing
    return screen_width / 2 - row_width / 2 + slot * spacing


def gather_x(card_count: int, screen_width: int, spacing: int) -> float:
    """Midpoint between the leftmost and rightmost used slot."""
    left = slot_x(0, card_count, screen_width, spacing)
    right = slot_x(card_count - 1, card_count, screen_width, spacing)
    return (left + right) / 2
