"""Turn selection without replacement.

A round hands every slot exactly one turn.  Each turn is a two-call protocol:

1. :meth:`SelectionEngine.spin` draws the next player and returns the slot
   angle the caller should animate towards.
2. :meth:`SelectionEngine.commit_selection` is called once that animation has
   finished, and only then does the draw become the visible selection.

The engine never waits on anything, so it can be driven from a UI callback,
a request handler or a test without real delays.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import (
    AlreadySpinningError,
    NoPendingSpinError,
    NotEnoughPlayersError,
    RoundExhaustedError,
    SelectionMismatchError,
)
from .ring import MIN_PLAYERS, RingLayout

__all__ = [
    "CommitOutcome",
    "SelectionEngine",
    "SelectionState",
    "SelectionStatus",
    "SpinResult",
]

logger = logging.getLogger(__name__)


class SelectionStatus(str, Enum):
    PLAYER_SELECTED = "player_selected"
    ROUND_COMPLETE = "round_complete"


@dataclass
class SelectionState:
    """Per-round bookkeeping owned by a single engine."""

    available: set[int] = field(default_factory=set)
    selected_id: int | None = None
    completed_ids: list[int] = field(default_factory=list)
    is_spinning: bool = False
    exhausted: bool = False
    pending_id: int | None = None

    @classmethod
    def fresh(cls, ids: tuple[int, ...]) -> SelectionState:
        return cls(available=set(ids))

    @property
    def order(self) -> list[int]:
        """Ids that have had their turn this round, oldest first."""

        if self.selected_id is None:
            return list(self.completed_ids)
        return [*self.completed_ids, self.selected_id]


@dataclass(frozen=True)
class SpinResult:
    selected_id: int
    angle: float


@dataclass(frozen=True)
class CommitOutcome:
    status: SelectionStatus
    selected_id: int
    remaining: int

    @property
    def round_complete(self) -> bool:
        return self.status is SelectionStatus.ROUND_COMPLETE


class SelectionEngine:
    """Stateful turn manager over one :class:`RingLayout`."""

    def __init__(self, layout: RingLayout | None = None, *, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._layout: RingLayout | None = None
        self._state = SelectionState()
        if layout is not None:
            self.reset(layout)

    @property
    def layout(self) -> RingLayout | None:
        return self._layout

    @property
    def state(self) -> SelectionState:
        return self._state

    def reset(self, layout: RingLayout | None = None) -> SelectionState:
        """Start a new round, optionally against a new layout.

        Clears the spin latch unconditionally, so it is also the way out of a
        spin that was never committed.
        """

        if layout is not None:
            self._layout = layout
        ids = self._layout.ids if self._layout is not None else ()
        self._state = SelectionState.fresh(ids)
        logger.debug("selection reset", extra={"players": len(ids)})
        return self._state

    def spin(self) -> SpinResult:
        state = self._state
        if state.is_spinning:
            raise AlreadySpinningError("a spin is already in progress")
        layout = self._layout
        if layout is None or len(layout) < MIN_PLAYERS:
            raise NotEnoughPlayersError(f"at least {MIN_PLAYERS} players are needed to spin")
        if state.exhausted:
            raise RoundExhaustedError("every player has had a turn; reset to start a new round")

        state.is_spinning = True
        if state.selected_id is not None:
            state.completed_ids.append(state.selected_id)
            state.selected_id = None

        drawn = self.rng.choice(sorted(state.available))
        state.pending_id = drawn
        angle = layout.slot_for(drawn).angle
        logger.debug("spin drew player %s at %.1f°", drawn, angle)
        return SpinResult(selected_id=drawn, angle=angle)

    def commit_selection(self, selected_id: int) -> CommitOutcome:
        state = self._state
        if not state.is_spinning or state.pending_id is None:
            raise NoPendingSpinError("no spin is waiting to be committed")
        if selected_id != state.pending_id:
            raise SelectionMismatchError(state.pending_id, selected_id)

        state.is_spinning = False
        state.pending_id = None
        state.selected_id = selected_id
        state.available.discard(selected_id)
        remaining = len(state.available)
        if remaining == 0:
            state.exhausted = True
            status = SelectionStatus.ROUND_COMPLETE
        else:
            status = SelectionStatus.PLAYER_SELECTED
        logger.debug("committed player %s; %s remaining", selected_id, remaining)
        return CommitOutcome(status=status, selected_id=selected_id, remaining=remaining)
