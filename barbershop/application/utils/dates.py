from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from barbershop.domain.entities.appointment import to_calendar_date

Clock = Callable[[], date]


def is_past(day: date | datetime, today: date) -> bool:
    """Strictly before today, comparing calendar dates only."""
    return to_calendar_date(day) < today


def is_upcoming(day: date | datetime, today: date) -> bool:
    return not is_past(day, today)
