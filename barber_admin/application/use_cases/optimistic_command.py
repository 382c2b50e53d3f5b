from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError

U = TypeVar("U")

APPLIED = "applied"
ROLLED_BACK = "rolled_back"
REJECTED = "rejected"


@dataclass(frozen=True)
class CommandResult:
    outcome: str  # "applied" | "rolled_back" | "rejected"
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == APPLIED


class OptimisticCommandRunner:
    """Apply a local change, call the backend, undo that change if the call fails.

    `apply` returns whatever `revert` needs to undo exactly its own change, so a failure
    never touches state written by other commands or by a newer fetch.
    At most one command per key is in flight; a second one is rejected without touching state.
    """

    def __init__(self) -> None:
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def run(
        self,
        key: str,
        apply: Callable[[], U],
        revert: Callable[[U], None],
        call: Callable[[], Any],
    ) -> CommandResult:
        with self._lock:
            if key in self._in_flight:
                self._logger.info("Command already in flight", extra={"booking_id": key})
                return CommandResult(outcome=REJECTED, error="Another update for this item is still in progress.")
            self._in_flight.add(key)

        try:
            undo = apply()
            try:
                value = call()
            except (BackendUpstreamError, BackendContractError) as e:
                revert(undo)
                self._logger.warning("Optimistic update rolled back", extra={"booking_id": key, "error": str(e)})
                return CommandResult(outcome=ROLLED_BACK, error=str(e))
            return CommandResult(outcome=APPLIED, value=value)
        finally:
            with self._lock:
                self._in_flight.discard(key)
