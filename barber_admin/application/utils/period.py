from __future__ import annotations

from calendar import monthrange
from datetime import date

from barber_admin.domain.entities.period import Period

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def month_period(year: int, month: int) -> Period:
    last_day = monthrange(year, month)[1]
    return Period(start=date(year, month, 1), end=date(year, month, last_day))


def resolve_period(
    mode: str = "month",
    year: int | None = None,
    month: int | None = None,
    range_from: date | None = None,
    range_to: date | None = None,
    today: date | None = None,
) -> Period:
    """Resolve the dashboard query window.

    "month" covers the whole calendar month; "range" uses from..to, or a single day when only
    `range_from` is set. Anything unresolvable falls back to the current month.
    """
    today = today or date.today()

    if mode == "month" and year is not None and month is not None:
        if 1 <= month <= 12 and 1 <= year <= 9999:
            return month_period(year, month)
    elif mode == "range" and range_from is not None:
        end = range_to or range_from
        if end < range_from:
            range_from, end = end, range_from
        return Period(start=range_from, end=end)

    return month_period(today.year, today.month)


def describe_period(period: Period) -> str:
    if period.start.day == 1 and period == month_period(period.start.year, period.start.month):
        return f"{MONTH_NAMES[period.start.month - 1]} {period.start.year}"
    if period.start == period.end:
        return period.start_iso
    return f"{period.start_iso} - {period.end_iso}"


def available_years(today: date | None = None, count: int = 5) -> list[int]:
    current = (today or date.today()).year
    return [current - offset for offset in range(count)]
