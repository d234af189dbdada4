from __future__ import annotations

import secrets
from collections.abc import Callable

from .core.engine_core import run_core
from .core.settings import PresentationSettings
from .sound.player import BellSink, SpinSound
from .ui.presenters import RichPresenter


def run_play(
    seed: int | None = None,
    players: int = 2,
    no_color: bool = False,
    muted: bool = False,
    _input_fn: Callable[[str], str] = input,
) -> list[list[int]]:
    presenter = RichPresenter(no_color=no_color, input_fn=_input_fn)
    sound = SpinSound(BellSink(presenter.console), muted=muted)
    # Choose a random seed when none is provided for varied games
    actual_seed = seed if seed is not None else secrets.randbits(32)
    return run_core(
        presenter,
        seed=actual_seed,
        player_count=players,
        sound=sound,
        settings=PresentationSettings.from_env(),
    )
