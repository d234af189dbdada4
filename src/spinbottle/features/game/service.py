from __future__ import annotations

import logging
import random
import secrets
import string
import threading
from dataclasses import dataclass, replace

from ...core import feature_flags
from ...core.interfaces import SoundPlayer
from ...core.settings import PresentationSettings
from ...dynamic.pointer import rest_rotation, ring_to_pointer_rotation
from ...dynamic.ring import MIN_PLAYERS, RingLayout, compute_layout
from ...dynamic.selection import SelectionEngine, SelectionStatus
from ...sound.player import SilentSound
from .concurrency import run_blocking
from .schemas import CommitPayload, RingPayload, SlotPayload, SpinPayload

__all__ = [
    "GameConfig",
    "GameManager",
    "GameState",
    "_ring_payload",
]

logger = logging.getLogger(__name__)

SPINNING_MESSAGE = "Selecting..."
ROUND_COMPLETE_MESSAGE = "Everyone has had a turn!"


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one game table."""

    player_count: int = MIN_PLAYERS
    seed: int | None = None


@dataclass
class GameState:
    config: GameConfig
    layout: RingLayout
    engine: SelectionEngine
    rounds_completed: int = 0
    message: str = ""
    status_class: str = "default"


class GameManager:
    """Owns game tables independent of the presentation layer."""

    def __init__(
        self,
        settings: PresentationSettings | None = None,
        sound: SoundPlayer | None = None,
    ) -> None:
        self.settings = settings or PresentationSettings.from_env()
        self.sound = sound or SilentSound()
        self._games: dict[str, GameState] = {}
        self._lock = threading.Lock()

    def create_game(self, config: GameConfig) -> str:
        seed = config.seed if config.seed is not None else secrets.SystemRandom().getrandbits(32)
        layout = compute_layout(config.player_count, radius=self.settings.ring_radius)
        engine = SelectionEngine(layout, rng=random.Random(seed))
        game_id = _gid()
        state = GameState(
            config=GameConfig(player_count=layout.player_count, seed=seed),
            layout=layout,
            engine=engine,
        )
        with self._lock:
            self._games[game_id] = state
        logger.debug("game created", extra={"game_id": game_id, "players": layout.player_count})
        return game_id

    async def create_game_async(self, config: GameConfig) -> str:
        return await run_blocking(self.create_game, config)

    def get_ring(self, game_id: str) -> RingPayload:
        with self._lock:
            state = self._require_game(game_id)
            return _ring_payload(game_id, state, self.settings)

    async def get_ring_async(self, game_id: str) -> RingPayload:
        return await run_blocking(self.get_ring, game_id)

    def set_player_count(self, game_id: str, player_count: int) -> RingPayload:
        layout = compute_layout(player_count, radius=self.settings.ring_radius)
        with self._lock:
            state = self._require_game(game_id)
            was_spinning = state.engine.state.is_spinning
            state.layout = layout
            state.config = replace(state.config, player_count=layout.player_count)
            state.engine.reset(layout)
            _set_status(state, "", "default")
            ring = _ring_payload(game_id, state, self.settings)
        if was_spinning:
            self.sound.spin_finished()
        return ring

    async def set_player_count_async(self, game_id: str, player_count: int) -> RingPayload:
        return await run_blocking(self.set_player_count, game_id, player_count)

    def spin(self, game_id: str) -> SpinPayload:
        with self._lock:
            state = self._require_game(game_id)
            result = state.engine.spin()
            _set_status(state, SPINNING_MESSAGE, "default")
            rotation = ring_to_pointer_rotation(
                result.angle,
                rest_offset=self.settings.pointer_rest_offset,
                extra_revolutions=self.settings.extra_revolutions,
            )
            ring = _ring_payload(game_id, state, self.settings)
        self.sound.spin_started()
        return SpinPayload(
            selected_id=result.selected_id,
            angle=result.angle,
            rotation=rotation,
            duration=self.settings.spin_duration,
            ring=ring,
        )

    async def spin_async(self, game_id: str) -> SpinPayload:
        return await run_blocking(self.spin, game_id)

    def commit(self, game_id: str, selected_id: int) -> CommitPayload:
        auto_reset = False
        with self._lock:
            state = self._require_game(game_id)
            outcome = state.engine.commit_selection(selected_id)
            message = f"P{outcome.selected_id} has been selected!"
            if outcome.round_complete:
                state.rounds_completed += 1
                message = f"{message} {ROUND_COMPLETE_MESSAGE}"
                _set_status(state, message, "complete")
                if feature_flags.is_enabled(feature_flags.AUTO_RESET):
                    state.engine.reset()
                    auto_reset = True
                logger.debug(
                    "round complete",
                    extra={"game_id": game_id, "rounds": state.rounds_completed, "auto_reset": auto_reset},
                )
            else:
                _set_status(state, message, "success")
            ring = _ring_payload(game_id, state, self.settings)
        self.sound.spin_finished()
        return CommitPayload(
            status=outcome.status.value,
            selected_id=outcome.selected_id,
            remaining=outcome.remaining,
            message=message,
            auto_reset=auto_reset,
            ring=ring,
        )

    async def commit_async(self, game_id: str, selected_id: int) -> CommitPayload:
        return await run_blocking(self.commit, game_id, selected_id)

    def reset(self, game_id: str) -> RingPayload:
        with self._lock:
            state = self._require_game(game_id)
            was_spinning = state.engine.state.is_spinning
            state.engine.reset()
            _set_status(state, "", "default")
            ring = _ring_payload(game_id, state, self.settings)
        if was_spinning:
            self.sound.spin_finished()
        return ring

    async def reset_async(self, game_id: str) -> RingPayload:
        return await run_blocking(self.reset, game_id)

    def drive_round(self, game_id: str, *, cleanup: bool = False) -> list[int]:
        """Spin and commit until the current round is exhausted.

        Returns the selection order for the round.  Commits happen straight
        away, as if every pointer animation finished instantly.  A spin that
        is still in flight is committed first.
        """

        with self._lock:
            selection = self._require_game(game_id).engine.state
            order = selection.order
            complete = selection.exhausted
            pending = selection.pending_id if selection.is_spinning else None
        if pending is not None:
            result = self.commit(game_id, pending)
            order.append(result.selected_id)
            complete = result.status == SelectionStatus.ROUND_COMPLETE.value
        while not complete:
            spin = self.spin(game_id)
            result = self.commit(game_id, spin.selected_id)
            order.append(result.selected_id)
            complete = result.status == SelectionStatus.ROUND_COMPLETE.value
        if cleanup:
            with self._lock:
                self._games.pop(game_id, None)
        logger.debug("drive_round completed", extra={"game_id": game_id, "order": order})
        return order

    def _require_game(self, game_id: str) -> GameState:
        state = self._games.get(game_id)
        if state is None:
            raise KeyError(f"game '{game_id}' not found")
        return state


def _gid(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _set_status(state: GameState, message: str, status_class: str) -> None:
    state.message = message
    state.status_class = status_class


def _ring_payload(game_id: str, state: GameState, settings: PresentationSettings) -> RingPayload:
    selection = state.engine.state
    completed = set(selection.completed_ids)
    slots = [
        SlotPayload(
            id=slot.id,
            angle=slot.angle,
            x=slot.offset.x,
            y=slot.offset.y,
            selected=slot.id == selection.selected_id,
            completed=slot.id in completed,
        )
        for slot in state.layout
    ]
    if selection.selected_id is not None:
        pointer = ring_to_pointer_rotation(
            state.layout.slot_for(selection.selected_id).angle,
            rest_offset=settings.pointer_rest_offset,
            extra_revolutions=0,
        )
    else:
        pointer = rest_rotation(settings.pointer_rest_offset)
    return RingPayload(
        game=game_id,
        player_count=state.layout.player_count,
        radius=state.layout.radius,
        slots=slots,
        available=sorted(selection.available),
        selected_id=selection.selected_id,
        completed_ids=list(selection.completed_ids),
        is_spinning=selection.is_spinning,
        exhausted=selection.exhausted,
        rounds_completed=state.rounds_completed,
        message=state.message,
        status_class=state.status_class,
        pointer_rotation=pointer,
    )
