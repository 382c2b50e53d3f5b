from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LoadStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    error = "error"


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus = LoadStatus.idle
    data: Any = None
    message: str | None = None

    @staticmethod
    def idle() -> "LoadState":
        return LoadState()

    @staticmethod
    def loading() -> "LoadState":
        return LoadState(status=LoadStatus.loading)

    @staticmethod
    def success(data: Any) -> "LoadState":
        return LoadState(status=LoadStatus.success, data=data)

    @staticmethod
    def error(message: str) -> "LoadState":
        return LoadState(status=LoadStatus.error, message=message)
