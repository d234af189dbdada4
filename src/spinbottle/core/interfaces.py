from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from ..dynamic.ring import RingLayout
from ..dynamic.selection import CommitOutcome, SelectionState, SpinResult

CommandKind = Literal["spin", "reset", "players", "quit"]


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    value: int | None = None


class SoundPlayer(ABC):
    """Fire-and-forget spin sound notifications."""

    @abstractmethod
    def spin_started(self) -> None: ...

    @abstractmethod
    def spin_finished(self) -> None: ...


class Presenter(ABC):
    @abstractmethod
    def start_game(self, layout: RingLayout) -> None: ...

    @abstractmethod
    def show_ring(self, layout: RingLayout, state: SelectionState) -> None: ...

    @abstractmethod
    def prompt_command(self, state: SelectionState) -> Command: ...

    @abstractmethod
    def show_spin(self, result: SpinResult, rotation: float) -> None: ...

    @abstractmethod
    def show_commit(self, outcome: CommitOutcome) -> None: ...

    @abstractmethod
    def show_error(self, error: Exception) -> None: ...

    @abstractmethod
    def round_reset(self, layout: RingLayout) -> None: ...

    @abstractmethod
    def summary(self, rounds: list[list[int]]) -> None: ...
