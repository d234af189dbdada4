"""Player ring geometry.

Slots sit on a circle around the pointer.  Angles use the ring's own
convention: 0° is left and angles grow clockwise, so 90° is up, 180° is right
and 270° is down.  Offsets come from standard trigonometry (0° right) after
:func:`ring_to_standard_angle`, and are laid out in screen space where y
grows downwards; that is what puts ring angle 90° above the centre.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from ..core.errors import InvalidCountError

__all__ = [
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "RING_RADIUS",
    "Offset",
    "PlayerSlot",
    "RingLayout",
    "compute_layout",
    "ring_to_standard_angle",
    "slot_angle",
    "standard_to_ring_angle",
]

MIN_PLAYERS = 2
MAX_PLAYERS = 12
RING_RADIUS = 120.0


@dataclass(frozen=True)
class Offset:
    x: float
    y: float


@dataclass(frozen=True)
class PlayerSlot:
    id: int
    angle: float
    offset: Offset


@dataclass(frozen=True)
class RingLayout:
    """Immutable slot set for one player count."""

    player_count: int
    radius: float
    slots: tuple[PlayerSlot, ...]

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[PlayerSlot]:
        return iter(self.slots)

    def __getitem__(self, index: int) -> PlayerSlot:
        return self.slots[index]

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(slot.id for slot in self.slots)

    def slot_for(self, slot_id: int) -> PlayerSlot:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        raise KeyError(f"no slot with id {slot_id}")


def ring_to_standard_angle(angle: float) -> float:
    """Convert a ring angle (0° left, clockwise) to a standard trig angle."""

    return (angle + 180.0) % 360.0


def standard_to_ring_angle(angle: float) -> float:
    """Convert a standard trig angle back to the ring convention."""

    return (angle + 180.0) % 360.0


def slot_angle(index: int, player_count: int) -> float:
    if player_count == 2:
        # Two players always face each other across the pointer: left and right.
        return 0.0 if index == 0 else 180.0
    return (index * 360.0 / player_count) % 360.0


def _project(angle: float, radius: float) -> Offset:
    radians = math.radians(ring_to_standard_angle(angle))
    return Offset(x=math.cos(radians) * radius, y=math.sin(radians) * radius)


def compute_layout(player_count: int, *, radius: float = RING_RADIUS) -> RingLayout:
    """Build the slot ring for ``player_count`` players.

    Raises :class:`InvalidCountError` instead of clamping; callers clamp user
    input before they get here.
    """

    if (
        isinstance(player_count, bool)
        or not isinstance(player_count, int)
        or not MIN_PLAYERS <= player_count <= MAX_PLAYERS
    ):
        raise InvalidCountError(player_count, MIN_PLAYERS, MAX_PLAYERS)

    slots = []
    for index in range(player_count):
        angle = slot_angle(index, player_count)
        slots.append(PlayerSlot(id=index + 1, angle=angle, offset=_project(angle, radius)))
    return RingLayout(player_count=player_count, radius=radius, slots=tuple(slots))
