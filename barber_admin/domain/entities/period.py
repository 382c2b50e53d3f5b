from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Period:
    start: date
    end: date

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()  # yyyy-MM-dd

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()


@dataclass(frozen=True)
class BlockedDay:
    id: str
    day: date
