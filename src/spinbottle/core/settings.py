"""Presentation settings.

These constants belong to whoever draws the ring and the pointer, not to the
selection engine.  Defaults match the bundled artwork; each one can be
overridden through a ``SPINBOTTLE_*`` environment variable.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from ..dynamic.pointer import DEFAULT_EXTRA_REVOLUTIONS, POINTER_REST_OFFSET
from ..dynamic.ring import RING_RADIUS

__all__ = ["PresentationSettings"]

logger = logging.getLogger(__name__)

_PREFIX: Final = "SPINBOTTLE_"


@dataclass(frozen=True)
class PresentationSettings:
    ring_radius: float = RING_RADIUS
    pointer_rest_offset: float = POINTER_REST_OFFSET
    extra_revolutions: int = DEFAULT_EXTRA_REVOLUTIONS
    spin_duration: float = 2.0
    reset_duration: float = 0.5

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PresentationSettings:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            ring_radius=_read(env, "RING_RADIUS", float, defaults.ring_radius, minimum=1.0),
            pointer_rest_offset=_read(env, "POINTER_OFFSET", float, defaults.pointer_rest_offset) % 360.0,
            extra_revolutions=_read(env, "EXTRA_TURNS", int, defaults.extra_revolutions, minimum=0),
            spin_duration=_read(env, "SPIN_SECONDS", float, defaults.spin_duration, minimum=0.0),
            reset_duration=_read(env, "RESET_SECONDS", float, defaults.reset_duration, minimum=0.0),
        )


def _read(
    env: Mapping[str, str],
    name: str,
    cast: Callable[[str], Any],
    default: Any,
    *,
    minimum: float | None = None,
) -> Any:
    key = _PREFIX + name
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r; expected %s", key, raw, cast.__name__)
        return default
    if not math.isfinite(value) or (minimum is not None and value < minimum):
        logger.warning("Ignoring %s=%r; out of range", key, raw)
        return default
    return value
