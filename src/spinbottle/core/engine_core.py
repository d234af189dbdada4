from __future__ import annotations

import random

from ..dynamic.pointer import ring_to_pointer_rotation
from ..dynamic.ring import compute_layout
from ..dynamic.selection import SelectionEngine
from ..sound.player import SilentSound
from . import feature_flags
from .errors import InvalidCountError, SpinRejectedError
from .interfaces import Presenter, SoundPlayer
from .settings import PresentationSettings


def run_core(
    presenter: Presenter,
    *,
    seed: int,
    player_count: int,
    sound: SoundPlayer | None = None,
    settings: PresentationSettings | None = None,
) -> list[list[int]]:
    """Drive spin/commit cycles from presenter commands until it asks to quit.

    Returns the selection order of every round that ran to completion.
    """

    settings = settings or PresentationSettings()
    sound = sound or SilentSound()
    layout = compute_layout(player_count, radius=settings.ring_radius)
    engine = SelectionEngine(layout, rng=random.Random(seed))
    presenter.start_game(layout)
    rounds: list[list[int]] = []

    while True:
        presenter.show_ring(layout, engine.state)
        command = presenter.prompt_command(engine.state)
        if command.kind == "quit":
            break
        if command.kind == "reset":
            engine.reset()
            presenter.round_reset(layout)
            continue
        if command.kind == "players":
            try:
                layout = compute_layout(command.value, radius=settings.ring_radius)
            except InvalidCountError as exc:
                presenter.show_error(exc)
                continue
            engine.reset(layout)
            presenter.start_game(layout)
            continue

        try:
            result = engine.spin()
        except SpinRejectedError as exc:
            presenter.show_error(exc)
            continue
        sound.spin_started()
        rotation = ring_to_pointer_rotation(
            result.angle,
            rest_offset=settings.pointer_rest_offset,
            extra_revolutions=settings.extra_revolutions,
        )
        presenter.show_spin(result, rotation)
        sound.spin_finished()
        outcome = engine.commit_selection(result.selected_id)
        presenter.show_commit(outcome)
        if outcome.round_complete:
            rounds.append(engine.state.order)
            if feature_flags.is_enabled(feature_flags.AUTO_RESET):
                engine.reset()
                presenter.round_reset(layout)

    presenter.summary(rounds)
    return rounds
