from __future__ import annotations

from dataclasses import dataclass

ALL = "all"


@dataclass(frozen=True)
class AgendaFilter:
    staff_id: str = ALL
    day_of_week: int | str = ALL  # 0 = Sunday .. 6 = Saturday
    include_past: bool = False

    @property
    def is_unfiltered(self) -> bool:
        return self.staff_id == ALL and self.day_of_week == ALL and self.include_past

    @staticmethod
    def from_query(
        staff_id: str | None = None,
        day_of_week: str | int | None = None,
        include_past: bool = False,
    ) -> "AgendaFilter":
        staff = (staff_id or "").strip() or ALL

        day: int | str = ALL
        raw_day = str(day_of_week).strip().lower() if day_of_week is not None else ""
        if raw_day and raw_day != ALL:
            try:
                day = int(raw_day)
            except ValueError:
                raise ValueError(f"day_of_week must be 0-6 or 'all', got {day_of_week!r}")
            if not 0 <= day <= 6:
                raise ValueError(f"day_of_week must be 0-6 or 'all', got {day_of_week!r}")

        return AgendaFilter(staff_id=staff, day_of_week=day, include_past=bool(include_past))
