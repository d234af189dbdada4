from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: list[str], input_text: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR)
    env.pop("SPINBOTTLE_FEATURES", None)
    cmd = [sys.executable, "-m", "spinbottle", *args]
    return subprocess.run(
        cmd,
        input=(input_text or "").encode(),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        cwd=PROJECT_ROOT,
        env=env,
        check=False,
    )


def test_play_full_round_then_quit() -> None:
    # three spins finish the round, the fourth is refused, then quit
    cp = run_cli(["play", "--players", "3", "--seed", "123", "--no-color"], input_text="\n\n\n\nq\n")
    out = cp.stdout.decode()
    assert cp.returncode == 0, out
    assert "Spin the Bottle" in out
    assert out.count("has been selected!") == 3
    assert "Everyone has had a turn!" in out
    assert "Round over" in out
    assert "Game Summary" in out


def test_play_is_the_default_mode_and_handles_eof() -> None:
    cp = run_cli(["--players", "2", "--seed", "1", "--no-color"], input_text="\n")
    out = cp.stdout.decode()
    assert cp.returncode == 0, out
    assert "has been selected!" in out
    assert "No complete rounds." in out


def test_default_prints_ansi_when_color_enabled() -> None:
    cp = run_cli(["--seed", "321"], input_text="q\n")
    out = cp.stdout.decode()
    assert cp.returncode == 0
    assert "\x1b[" in out


def test_out_of_range_players_is_a_usage_error() -> None:
    cp = run_cli(["--players", "20"])
    assert cp.returncode == 2
    assert "--players must be between 2 and 12" in cp.stdout.decode()
