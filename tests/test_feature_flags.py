from __future__ import annotations

import os

from spinbottle.core import feature_flags


def test_env_and_override_stack() -> None:
    env_var = "SPINBOTTLE_FEATURES"
    original = os.environ.get(env_var)
    try:
        if env_var in os.environ:
            del os.environ[env_var]

        assert feature_flags.is_enabled(feature_flags.AUTO_RESET) is False

        feature_flags.set_env_flags(["Round.Auto_Reset"])
        assert feature_flags.is_enabled(feature_flags.AUTO_RESET) is True

        with feature_flags.override(disable={feature_flags.AUTO_RESET}):
            assert feature_flags.is_enabled(feature_flags.AUTO_RESET) is False
            with feature_flags.override(enable={feature_flags.SHOW_ANGLES}):
                assert feature_flags.is_enabled(feature_flags.SHOW_ANGLES) is True
                assert feature_flags.is_enabled(feature_flags.AUTO_RESET) is False

        assert feature_flags.is_enabled(feature_flags.AUTO_RESET) is True
        assert feature_flags.is_enabled(feature_flags.SHOW_ANGLES) is False

    finally:
        if original is None:
            os.environ.pop(env_var, None)
        else:
            os.environ[env_var] = original
