from __future__ import annotations

import pytest

from spinbottle.dynamic.pointer import pointer_to_ring_angle, rest_rotation, ring_to_pointer_rotation


def test_first_slot_needs_three_quarter_turn_from_rest() -> None:
    assert rest_rotation() == 270.0
    assert ring_to_pointer_rotation(0.0, extra_revolutions=0) == 270.0


def test_extra_revolutions_add_full_turns() -> None:
    assert ring_to_pointer_rotation(180.0) == 90.0 + 720.0
    assert ring_to_pointer_rotation(90.0, extra_revolutions=3) == 0.0 + 1080.0


def test_custom_rest_offset() -> None:
    assert ring_to_pointer_rotation(0.0, rest_offset=90.0, extra_revolutions=0) == 90.0
    assert rest_rotation(90.0) == 90.0


def test_pointer_rotation_maps_back_to_ring_angle() -> None:
    for angle in (0.0, 30.0, 90.0, 180.0, 330.0):
        rotation = ring_to_pointer_rotation(angle)
        assert pointer_to_ring_angle(rotation) == pytest.approx(angle)


def test_negative_revolutions_rejected() -> None:
    with pytest.raises(ValueError):
        ring_to_pointer_rotation(0.0, extra_revolutions=-1)
