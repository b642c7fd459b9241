from __future__ import annotations

import calendar
from datetime import date

from barbershop.application.exceptions import ValidationError
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.domain.entities.appointment import Appointment


class ScheduleCalendar:
    """Appointments grouped by calendar day, for the admin month view."""

    def __init__(self, store: LedgerStorePort) -> None:
        self._store = store

    def month(self, year: int, month: int) -> dict[date, list[Appointment]]:
        if not 1 <= month <= 12:
            raise ValidationError("InvalidField", f"month must be 1-12, got {month}")
        days_in_month = calendar.monthrange(year, month)[1]
        grid: dict[date, list[Appointment]] = {
            date(year, month, day): [] for day in range(1, days_in_month + 1)
        }
        for appointment in self._store.list_appointments():
            if appointment.date in grid:
                grid[appointment.date].append(appointment)
        return grid

    def day(self, day: date) -> list[Appointment]:
        return [a for a in self._store.list_appointments() if a.date == day]
