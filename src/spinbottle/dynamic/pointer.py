"""Ring angle to pointer rotation conversions.

The pointer graphic has its own zero: at rotation 0 it points up, and
rotations grow clockwise.  Ring angles start at the left, so reaching ring
angle ``a`` needs ``a + 270`` degrees of pointer rotation.  The offset belongs
to the artwork, so it is a parameter here and a setting in
:mod:`spinbottle.core.settings`.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_EXTRA_REVOLUTIONS",
    "POINTER_REST_OFFSET",
    "pointer_to_ring_angle",
    "rest_rotation",
    "ring_to_pointer_rotation",
]

POINTER_REST_OFFSET = 270.0
DEFAULT_EXTRA_REVOLUTIONS = 2


def ring_to_pointer_rotation(
    angle: float,
    *,
    rest_offset: float = POINTER_REST_OFFSET,
    extra_revolutions: int = DEFAULT_EXTRA_REVOLUTIONS,
) -> float:
    """Absolute pointer rotation that lands on ring ``angle``.

    ``extra_revolutions`` full turns are added on top for the spin flourish.
    """

    if extra_revolutions < 0:
        raise ValueError("extra_revolutions must be >= 0")
    return (angle + rest_offset) % 360.0 + 360.0 * extra_revolutions


def pointer_to_ring_angle(rotation: float, *, rest_offset: float = POINTER_REST_OFFSET) -> float:
    return (rotation - rest_offset) % 360.0


def rest_rotation(rest_offset: float = POINTER_REST_OFFSET) -> float:
    """Rotation that points at the first slot (ring angle 0°)."""

    return ring_to_pointer_rotation(0.0, rest_offset=rest_offset, extra_revolutions=0)
