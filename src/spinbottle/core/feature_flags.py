"""Lightweight feature flag helpers.

Flags switch optional game behaviour on without touching configuration
files: they are read from an environment variable and can be overridden
temporarily in tests via a context manager.

Usage::

    from spinbottle.core import feature_flags

    if feature_flags.is_enabled(feature_flags.AUTO_RESET):
        ...

The environment variable ``SPINBOTTLE_FEATURES`` accepts a comma-separated
list of flag names.  Flag names are case-insensitive.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Final

_ENV_VAR: Final = "SPINBOTTLE_FEATURES"

AUTO_RESET: Final = "round.auto_reset"
SHOW_ANGLES: Final = "ui.show_angles"


def _normalise(flag: str) -> str:
    return flag.strip().lower()


def _parse_env(raw: str | None) -> set[str]:
    if not raw:
        return set()
    return {_normalise(entry) for entry in raw.split(",") if entry.strip()}


_OVERRIDE_STACK: list[tuple[set[str], set[str]]] = []


def _current_overrides() -> tuple[set[str], set[str]]:
    enabled: set[str] = set()
    disabled: set[str] = set()
    for en, dis in _OVERRIDE_STACK:
        enabled.update(en)
        disabled.update(dis)
    return enabled, disabled


def is_enabled(flag: str) -> bool:
    """Return True when *flag* is enabled via env var or overrides."""

    key = _normalise(flag)
    enabled, disabled = _current_overrides()
    if key in disabled:
        return False
    if key in enabled:
        return True
    return key in _parse_env(os.getenv(_ENV_VAR))


@contextmanager
def override(*, enable: Iterable[str] | None = None, disable: Iterable[str] | None = None):
    """Temporarily override flag state within the context.

    Overrides are stacked, so nested contexts behave predictably.
    """

    enabled = {_normalise(flag) for flag in (enable or ())}
    disabled = {_normalise(flag) for flag in (disable or ())}
    _OVERRIDE_STACK.append((enabled, disabled))
    try:
        yield
    finally:
        _OVERRIDE_STACK.pop()


def set_env_flags(flags: Iterable[str]) -> None:
    os.environ[_ENV_VAR] = ",".join(sorted({_normalise(flag) for flag in flags}))
