from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from ..dynamic.pointer import rest_rotation
from ..dynamic.ring import MAX_PLAYERS, MIN_PLAYERS
from ..features.game import GameManager, create_game_router
from ..sound.tone import encode_wav, render_spin_tone

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


@lru_cache(maxsize=16)
def _spin_wav(volume: float) -> bytes:
    return encode_wav(render_spin_tone(volume=volume))


def create_app(manager: GameManager | None = None) -> FastAPI:
    manager = manager or GameManager()
    app = FastAPI(title="Spin the Bottle")
    app.state.manager = manager
    app.include_router(create_game_router(manager, templates))

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> Response:
        settings = manager.settings
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "request": request,
                "settings": settings,
                "min_players": MIN_PLAYERS,
                "max_players": MAX_PLAYERS,
                "rest_rotation": rest_rotation(settings.pointer_rest_offset),
            },
        )

    @app.get("/sound/spin.wav")
    def spin_sound(volume: float = Query(1.0, ge=0.0, le=1.0)) -> Response:
        return Response(_spin_wav(round(volume, 2)), media_type="audio/wav")

    return app


app = create_app()


def main(host: str | None = None, port: int | None = None) -> None:  # pragma: no cover - runner
    import uvicorn

    bind = host or os.environ.get("BIND", "127.0.0.1")
    listen = port or int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host=bind, port=listen)


if __name__ == "__main__":  # pragma: no cover
    main()
