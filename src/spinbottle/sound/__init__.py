"""Spin sound synthesis and playback."""

from .player import BellSink, NullSink, SilentSound, SoundSink, SpinSound
from .tone import encode_wav, render_spin_tone

__all__ = [
    "BellSink",
    "NullSink",
    "SilentSound",
    "SoundSink",
    "SpinSound",
    "encode_wav",
    "render_spin_tone",
]
