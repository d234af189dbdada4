from __future__ import annotations

import contextlib
import copy
import random

import pytest

from spinbottle.core.errors import (
    AlreadySpinningError,
    NoPendingSpinError,
    NotEnoughPlayersError,
    RoundExhaustedError,
    SelectionMismatchError,
    SpinRejectedError,
)
from spinbottle.dynamic.ring import RingLayout, compute_layout
from spinbottle.dynamic.selection import SelectionEngine, SelectionState, SelectionStatus


def _play_round(engine: SelectionEngine) -> list[int]:
    picks: list[int] = []
    while not engine.state.exhausted:
        result = engine.spin()
        engine.commit_selection(result.selected_id)
        picks.append(result.selected_id)
    return picks


def _assert_partitioned(state: SelectionState, ids: set[int]) -> None:
    selected = {state.selected_id} if state.selected_id is not None else set()
    completed = set(state.completed_ids)
    assert len(completed) == len(state.completed_ids)
    assert not (state.available & selected)
    assert not (state.available & completed)
    assert not (selected & completed)
    assert state.available | selected | completed == ids
    assert state.exhausted == (not state.available)


def test_reset_makes_every_player_available() -> None:
    engine = SelectionEngine(compute_layout(6), rng=random.Random(3))

    state = engine.state
    assert state.available == {1, 2, 3, 4, 5, 6}
    assert state.selected_id is None
    assert state.completed_ids == []
    assert state.is_spinning is False
    assert state.exhausted is False


def test_spin_reports_the_drawn_slot_angle_and_latches() -> None:
    layout = compute_layout(4)
    engine = SelectionEngine(layout, rng=random.Random(11))

    result = engine.spin()

    assert result.selected_id in layout.ids
    assert result.angle == layout.slot_for(result.selected_id).angle
    assert engine.state.is_spinning is True
    # the draw only becomes the selection on commit
    assert engine.state.selected_id is None
    assert result.selected_id in engine.state.available


def test_commit_applies_the_selection() -> None:
    engine = SelectionEngine(compute_layout(3), rng=random.Random(5))
    result = engine.spin()

    outcome = engine.commit_selection(result.selected_id)

    assert outcome.status is SelectionStatus.PLAYER_SELECTED
    assert outcome.remaining == 2
    assert outcome.round_complete is False
    state = engine.state
    assert state.selected_id == result.selected_id
    assert result.selected_id not in state.available
    assert state.is_spinning is False


def test_next_spin_moves_previous_selection_to_completed() -> None:
    engine = SelectionEngine(compute_layout(5), rng=random.Random(8))
    first = engine.spin()
    engine.commit_selection(first.selected_id)

    engine.spin()

    assert engine.state.completed_ids == [first.selected_id]
    assert engine.state.selected_id is None


def test_full_round_covers_every_player_once() -> None:
    layout = compute_layout(7)
    engine = SelectionEngine(layout, rng=random.Random(21))
    ids = set(layout.ids)

    picks: list[int] = []
    for _ in range(len(layout)):
        result = engine.spin()
        outcome = engine.commit_selection(result.selected_id)
        picks.append(result.selected_id)
        _assert_partitioned(engine.state, ids)

    assert outcome.status is SelectionStatus.ROUND_COMPLETE
    assert outcome.remaining == 0
    assert sorted(picks) == sorted(ids)
    assert engine.state.exhausted is True
    assert engine.state.available == set()
    assert engine.state.order == picks


def test_second_spin_before_commit_is_rejected_without_changes() -> None:
    engine = SelectionEngine(compute_layout(4), rng=random.Random(2))
    engine.spin()
    before = copy.deepcopy(engine.state)

    with pytest.raises(AlreadySpinningError) as info:
        engine.spin()

    assert info.value.code == "already_spinning"
    assert engine.state == before


def test_spin_after_exhaustion_is_rejected_without_changes() -> None:
    engine = SelectionEngine(compute_layout(3), rng=random.Random(4))
    _play_round(engine)
    completed = list(engine.state.completed_ids)
    selected = engine.state.selected_id

    with pytest.raises(RoundExhaustedError):
        engine.spin()

    assert engine.state.completed_ids == completed
    assert engine.state.selected_id == selected
    assert engine.state.available == set()
    assert engine.state.is_spinning is False


def test_spin_without_enough_players_is_rejected() -> None:
    with pytest.raises(NotEnoughPlayersError):
        SelectionEngine().spin()

    single = RingLayout(player_count=1, radius=120.0, slots=compute_layout(2).slots[:1])
    with pytest.raises(NotEnoughPlayersError):
        SelectionEngine(single).spin()


def test_rejections_share_a_swallowable_base() -> None:
    engine = SelectionEngine(compute_layout(2), rng=random.Random(1))
    _play_round(engine)

    with contextlib.suppress(SpinRejectedError):
        engine.spin()

    assert engine.state.exhausted is True


def test_commit_without_spin_is_rejected() -> None:
    engine = SelectionEngine(compute_layout(3), rng=random.Random(6))

    with pytest.raises(NoPendingSpinError):
        engine.commit_selection(1)


def test_commit_of_a_different_player_is_rejected() -> None:
    engine = SelectionEngine(compute_layout(3), rng=random.Random(6))
    result = engine.spin()
    other = next(pid for pid in (1, 2, 3) if pid != result.selected_id)

    with pytest.raises(SelectionMismatchError):
        engine.commit_selection(other)

    assert engine.state.is_spinning is True
    assert engine.commit_selection(result.selected_id).selected_id == result.selected_id


def test_reset_mid_spin_clears_the_latch() -> None:
    engine = SelectionEngine(compute_layout(4), rng=random.Random(9))
    engine.spin()

    engine.reset()

    assert engine.state.is_spinning is False
    assert engine.state.available == {1, 2, 3, 4}
    engine.spin()


def test_reset_with_new_layout_switches_player_count() -> None:
    engine = SelectionEngine(compute_layout(4), rng=random.Random(9))
    _play_round(engine)

    engine.reset(compute_layout(6))

    assert engine.layout is not None and len(engine.layout) == 6
    assert engine.state.available == set(range(1, 7))
    assert engine.state.exhausted is False


def test_rounds_always_cover_all_players() -> None:
    engine = SelectionEngine(compute_layout(5))
    orders = []
    for _ in range(2):
        engine.reset()
        orders.append(_play_round(engine))

    for order in orders:
        assert sorted(order) == [1, 2, 3, 4, 5]


def test_seeded_engines_draw_the_same_order() -> None:
    first = _play_round(SelectionEngine(compute_layout(8), rng=random.Random(42)))
    second = _play_round(SelectionEngine(compute_layout(8), rng=random.Random(42)))

    assert first == second


def test_draws_are_uniform_over_remaining_players() -> None:
    rng = random.Random(1234)
    counts = {1: 0, 2: 0, 3: 0, 4: 0}
    engine = SelectionEngine(compute_layout(4), rng=rng)
    for _ in range(4000):
        engine.reset()
        counts[engine.spin().selected_id] += 1

    for count in counts.values():
        assert 850 < count < 1150
