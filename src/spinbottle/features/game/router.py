from __future__ import annotations

import json
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, model_validator

from ...core.errors import InvalidCountError, SpinBottleError
from ...dynamic.ring import MAX_PLAYERS, MIN_PLAYERS
from .schemas import ErrorPayload, RingPayload
from .service import GameConfig, GameManager

__all__ = ["CommitRequest", "CreateGameRequest", "PlayerCountRequest", "create_game_router"]

_HX_HEADER = "HX-Request"
_INT_FIELDS = ("players", "seed", "selected_id")

T = TypeVar("T")


def _coerce_ints(data: object) -> object:
    if not isinstance(data, dict):
        return data
    cleaned: dict[str, object] = dict(data)
    for field in _INT_FIELDS:
        if field not in cleaned:
            continue
        value = cleaned[field]
        if value in (None, ""):
            cleaned[field] = None
            continue
        if isinstance(value, str):
            try:
                cleaned[field] = int(value.strip())
            except ValueError:
                cleaned[field] = None
    return cleaned


def clamp_player_count(value: int | None) -> int:
    if value is None:
        return MIN_PLAYERS
    return max(MIN_PLAYERS, min(MAX_PLAYERS, value))


class PlayerCountRequest(BaseModel):
    players: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: object) -> object:
        return _coerce_ints(data)

    @model_validator(mode="after")
    def _normalize(self) -> PlayerCountRequest:
        self.players = clamp_player_count(self.players)
        return self


class CreateGameRequest(PlayerCountRequest):
    seed: int | None = None


class CommitRequest(BaseModel):
    selected_id: int

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: object) -> object:
        return _coerce_ints(data)


class _GameController:
    def __init__(self, manager: GameManager, templates: Jinja2Templates) -> None:
        self.manager = manager
        self.templates = templates

    # ------------------------------------------------------------------ helpers
    def _is_hx(self, request: Request) -> bool:
        return request.headers.get(_HX_HEADER, "").lower() == "true"

    def _json_response(self, data: dict[str, object]) -> JSONResponse:
        response = JSONResponse(data)
        response.headers.setdefault("Vary", _HX_HEADER)
        return response

    def _ring_fragment(
        self,
        request: Request,
        ring: RingPayload,
        *,
        trigger: dict[str, str] | None = None,
    ) -> Response:
        headers: dict[str, str] = {"Vary": _HX_HEADER}
        if trigger:
            headers["HX-Trigger"] = json.dumps(trigger)
        return self.templates.TemplateResponse(
            request,
            "game/ring.html",
            {"ring": ring, "request": request},
            headers=headers,
        )

    def _ring_response(self, request: Request, ring: RingPayload, *, trigger: str) -> Response:
        if self._is_hx(request):
            return self._ring_fragment(request, ring, trigger={trigger: ring.game})
        return self._json_response(ring.to_dict())

    async def _call(self, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except InvalidCountError as exc:
            raise HTTPException(400, _error_detail(exc)) from exc
        except SpinBottleError as exc:
            raise HTTPException(409, _error_detail(exc)) from exc

    # ------------------------------------------------------------------ actions
    async def create(self, request: Request, body: CreateGameRequest) -> Response:
        game_id = await self._call(
            self.manager.create_game_async(GameConfig(player_count=body.players, seed=body.seed))
        )
        if self._is_hx(request):
            ring = await self._call(self.manager.get_ring_async(game_id))
            return self._ring_fragment(request, ring, trigger={"gameCreated": game_id})
        return self._json_response({"game": game_id})

    async def ring(self, request: Request, gid: str) -> Response:
        ring = await self._call(self.manager.get_ring_async(gid))
        if self._is_hx(request):
            return self._ring_fragment(request, ring)
        return self._json_response(ring.to_dict())

    async def players(self, request: Request, gid: str, body: PlayerCountRequest) -> Response:
        ring = await self._call(self.manager.set_player_count_async(gid, body.players))
        return self._ring_response(request, ring, trigger="gameUpdated")

    async def spin(self, gid: str) -> Response:
        result = await self._call(self.manager.spin_async(gid))
        return self._json_response(result.to_dict())

    async def commit(self, request: Request, gid: str, body: CommitRequest) -> Response:
        result = await self._call(self.manager.commit_async(gid, body.selected_id))
        if self._is_hx(request):
            return self._ring_fragment(request, result.ring, trigger={"gameUpdated": gid})
        return self._json_response(result.to_dict())

    async def reset(self, request: Request, gid: str) -> Response:
        ring = await self._call(self.manager.reset_async(gid))
        return self._ring_response(request, ring, trigger="gameReset")


def _error_detail(exc: SpinBottleError) -> dict[str, object]:
    return ErrorPayload(error=exc.code, message=str(exc)).to_dict()


def create_game_router(manager: GameManager, templates: Jinja2Templates) -> APIRouter:
    controller = _GameController(manager, templates)
    router = APIRouter(prefix="/api/v1/game", tags=["game"])

    @router.post("")
    async def create_game(request: Request, body: CreateGameRequest) -> Response:
        return await controller.create(request, body)

    @router.get("/{gid}")
    async def get_ring(request: Request, gid: str) -> Response:
        return await controller.ring(request, gid)

    @router.post("/{gid}/players")
    async def set_players(request: Request, gid: str, body: PlayerCountRequest) -> Response:
        return await controller.players(request, gid, body)

    @router.post("/{gid}/spin")
    async def spin(gid: str) -> Response:
        return await controller.spin(gid)

    @router.post("/{gid}/commit")
    async def commit(request: Request, gid: str, body: CommitRequest) -> Response:
        return await controller.commit(request, gid, body)

    @router.post("/{gid}/reset")
    async def reset(request: Request, gid: str) -> Response:
        return await controller.reset(request, gid)

    return router
