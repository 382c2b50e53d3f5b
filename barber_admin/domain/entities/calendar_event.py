from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    title: str  # "<customer> - <service>"
    start: datetime
    end: datetime
    color: str
    staff_id: str | None = None
