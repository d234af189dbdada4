from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np
from rich.console import Console

from ..core.interfaces import SoundPlayer
from .tone import DEFAULT_SAMPLE_RATE, clamp_volume, render_spin_tone

__all__ = ["BellSink", "NullSink", "SilentSound", "SoundSink", "SpinSound"]

logger = logging.getLogger(__name__)


class SoundSink(ABC):
    """Output device for rendered samples."""

    @abstractmethod
    def start(self, samples: np.ndarray) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...


class NullSink(SoundSink):
    def start(self, samples: np.ndarray) -> None:
        return None

    def stop(self) -> None:
        return None


class BellSink(SoundSink):
    """Terminal stand-in: rings the console bell when a spin starts."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def start(self, samples: np.ndarray) -> None:
        self.console.bell()

    def stop(self) -> None:
        return None


class SilentSound(SoundPlayer):
    def spin_started(self) -> None:
        return None

    def spin_finished(self) -> None:
        return None


class SpinSound(SoundPlayer):
    """Plays the spin tone through a sink, honouring mute and volume.

    Sink failures are logged and dropped; a broken speaker must never stop a
    spin from completing.
    """

    def __init__(
        self,
        sink: SoundSink,
        *,
        volume: float = 1.0,
        muted: bool = False,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
    ) -> None:
        self.sink = sink
        self.sample_rate = sample_rate
        self._volume = clamp_volume(volume)
        self._muted = muted
        self._playing = False
        self._tone: np.ndarray | None = None

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def is_playing(self) -> bool:
        return self._playing

    def set_volume(self, volume: float) -> float:
        self._volume = clamp_volume(volume)
        logger.debug("Volume set to %.2f", self._volume)
        return self._volume

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        if self._muted:
            self.spin_finished()
        return self._muted

    def spin_started(self) -> None:
        if self._muted or self._playing:
            return
        if self._tone is None:
            self._tone = render_spin_tone(sample_rate=self.sample_rate)
        try:
            self.sink.start(self._tone * self._volume)
        except Exception:
            logger.warning("Spin sound failed to start", exc_info=True)
            return
        self._playing = True

    def spin_finished(self) -> None:
        if not self._playing:
            return
        self._playing = False
        try:
            self.sink.stop()
        except Exception:
            logger.warning("Spin sound failed to stop", exc_info=True)
