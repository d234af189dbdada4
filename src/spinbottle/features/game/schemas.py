from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = [
    "CommitPayload",
    "ErrorPayload",
    "RingPayload",
    "SlotPayload",
    "SpinPayload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SlotPayload(_APIModel):
    id: int
    angle: float
    x: float
    y: float
    selected: bool
    completed: bool


class RingPayload(_APIModel):
    game: str
    player_count: int
    radius: float
    slots: list[SlotPayload]
    available: list[int]
    selected_id: int | None = None
    completed_ids: list[int]
    is_spinning: bool
    exhausted: bool
    rounds_completed: int
    message: str
    status_class: str
    pointer_rotation: float


class SpinPayload(_APIModel):
    selected_id: int
    angle: float
    rotation: float
    duration: float
    ring: RingPayload


class CommitPayload(_APIModel):
    status: str
    selected_id: int
    remaining: int
    message: str
    auto_reset: bool = False
    ring: RingPayload


class ErrorPayload(_APIModel):
    error: str
    message: str
