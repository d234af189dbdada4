"""Error taxonomy for the ring and selection engine.

Every error here is locally recoverable: the operation that raised it has not
touched any state.  Each class carries a stable ``code`` so the HTTP layer and
tests can tell an ignored spin apart from another without string matching.
"""

from __future__ import annotations

__all__ = [
    "AlreadySpinningError",
    "CommitError",
    "InvalidCountError",
    "NoPendingSpinError",
    "NotEnoughPlayersError",
    "RoundExhaustedError",
    "SelectionMismatchError",
    "SpinBottleError",
    "SpinRejectedError",
]


class SpinBottleError(Exception):
    code = "spinbottle_error"


class InvalidCountError(SpinBottleError, ValueError):
    code = "invalid_count"

    def __init__(self, count: object, minimum: int, maximum: int) -> None:
        super().__init__(f"player count must be an integer in [{minimum}, {maximum}]; got {count!r}")
        self.count = count
        self.minimum = minimum
        self.maximum = maximum


class SpinRejectedError(SpinBottleError):
    """A spin request that the engine ignored.

    Callers wanting the fire-and-forget behaviour of a button press can wrap
    ``spin()`` in ``contextlib.suppress(SpinRejectedError)``.
    """

    code = "spin_rejected"


class AlreadySpinningError(SpinRejectedError):
    code = "already_spinning"


class NotEnoughPlayersError(SpinRejectedError):
    code = "not_enough_players"


class RoundExhaustedError(SpinRejectedError):
    code = "round_exhausted"


class CommitError(SpinBottleError):
    code = "commit_error"


class NoPendingSpinError(CommitError):
    code = "no_pending_spin"


class SelectionMismatchError(CommitError):
    code = "selection_mismatch"

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"spin drew player {expected}, cannot commit player {received}")
        self.expected = expected
        self.received = received
