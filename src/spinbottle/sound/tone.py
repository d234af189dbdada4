"""Synthesised spin sound.

A two second mono sweep whose pitch wobbles around 200 Hz and fades out,
rendered with numpy and packed as 16-bit PCM WAV for the browser.
"""

from __future__ import annotations

import io
import wave

import numpy as np

__all__ = ["DEFAULT_SAMPLE_RATE", "SPIN_TONE_SECONDS", "clamp_volume", "encode_wav", "render_spin_tone"]

DEFAULT_SAMPLE_RATE = 22_050
SPIN_TONE_SECONDS = 2.0

_BASE_HZ = 200.0
_WOBBLE_HZ = 50.0
_WOBBLE_RATE = 10.0
_DECAY = 2.0
_PEAK = 0.3


def clamp_volume(volume: float) -> float:
    if volume != volume:  # NaN
        return 0.0
    return max(0.0, min(1.0, float(volume)))


def render_spin_tone(
    *,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    duration: float = SPIN_TONE_SECONDS,
    volume: float = 1.0,
) -> np.ndarray:
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")
    frames = max(0, int(sample_rate * duration))
    t = np.arange(frames, dtype=np.float64) / sample_rate
    frequency = _BASE_HZ + np.sin(t * _WOBBLE_RATE) * _WOBBLE_HZ
    amplitude = np.exp(-t * _DECAY)
    samples = np.sin(2.0 * np.pi * frequency * t) * amplitude * _PEAK * clamp_volume(volume)
    return samples.astype(np.float32)


def encode_wav(samples: np.ndarray, *, sample_rate: int = DEFAULT_SAMPLE_RATE) -> bytes:
    pcm = (np.clip(samples, -1.0, 1.0) * 32767.0).astype("<i2")
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm.tobytes())
    return buffer.getvalue()
