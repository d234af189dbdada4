"""Game feature: service layer, schemas, and API router."""

from .router import create_game_router
from .schemas import CommitPayload, ErrorPayload, RingPayload, SlotPayload, SpinPayload
from .service import GameConfig, GameManager

__all__ = [
    "CommitPayload",
    "ErrorPayload",
    "GameConfig",
    "GameManager",
    "RingPayload",
    "SlotPayload",
    "SpinPayload",
    "create_game_router",
]
