import os
import signal
import subprocess
import sys
from contextlib import suppress
from pathlib import Path

import httpx
import pytest
from tenacity import retry, stop_after_delay, wait_fixed

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SERVER_HOST = "127.0.0.1"
SERVER_PORT = int(os.environ.get("SPINBOTTLE_QA_PORT", "8765"))
SERVER_URL = f"{SERVER_HOST}:{SERVER_PORT}"


class ServerProcess:
    def __init__(self):
        self.process: subprocess.Popen | None = None

    def start(self) -> None:
        env = os.environ.copy()
        env["PYTHONPATH"] = str(PROJECT_ROOT / "src")
        cmd = [sys.executable, "-m", "spinbottle", "serve", "--host", SERVER_HOST, "--port", str(SERVER_PORT)]
        self.process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            env=env,
        )

    def stop(self) -> None:
        if not self.process:
            return
        with suppress(ProcessLookupError):
            self.process.send_signal(signal.SIGINT)
        try:
            self.process.wait(timeout=10)
        except subprocess.TimeoutExpired:
            with suppress(ProcessLookupError):
                self.process.kill()
        self.process = None


@pytest.fixture(scope="session")
def server():
    proc = ServerProcess()
    proc.start()
    try:
        wait_for_healthcheck()
        yield SERVER_URL
    finally:
        proc.stop()


@retry(stop=stop_after_delay(30), wait=wait_fixed(0.5))
def wait_for_healthcheck() -> None:
    response = httpx.get(f"http://{SERVER_URL}/healthz", timeout=1.0)
    response.raise_for_status()


def test_round_flow(server):
    with httpx.Client(base_url=f"http://{server}", timeout=10.0) as client:
        resp = client.post("/api/v1/game", json={"players": 3})
        resp.raise_for_status()
        game = resp.json()["game"]

        picks = []
        for _ in range(3):
            spin = client.post(f"/api/v1/game/{game}/spin")
            spin.raise_for_status()
            selected = spin.json()["selected_id"]
            commit = client.post(f"/api/v1/game/{game}/commit", json={"selected_id": selected})
            commit.raise_for_status()
            picks.append(selected)

        assert sorted(picks) == [1, 2, 3]
        assert commit.json()["status"] == "round_complete"
        assert client.post(f"/api/v1/game/{game}/spin").status_code == 409


def test_web_assets_serve(server):
    with httpx.Client(base_url=f"http://{server}", timeout=10.0) as client:
        resp = client.get("/")
        resp.raise_for_status()
        assert "Spin the Bottle" in resp.text

        resp = client.get("/sound/spin.wav")
        resp.raise_for_status()
        assert resp.headers["content-type"] == "audio/wav"
