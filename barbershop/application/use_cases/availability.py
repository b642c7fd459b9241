from __future__ import annotations

from datetime import date, datetime

from barbershop.application.ports.catalog import CatalogPort
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.domain.entities.appointment import to_calendar_date


class AvailabilityEngine:
    """Slot availability per barber and calendar day. Read-only over the ledger."""

    def __init__(self, store: LedgerStorePort, catalog: CatalogPort) -> None:
        self._store = store
        self._catalog = catalog

    def is_slot_taken(self, day: date | datetime, time: str, barber_name: str) -> bool:
        day = to_calendar_date(day)
        return any(a.occupies(day, time, barber_name) for a in self._store.list_appointments())

    def taken_slots(self, day: date | datetime, barber_name: str) -> list[str]:
        day = to_calendar_date(day)
        taken = {
            a.time
            for a in self._store.list_appointments()
            if a.barber.name == barber_name and a.date == day
        }
        return [slot for slot in self._catalog.time_slots() if slot in taken]

    def available_slots(self, day: date | datetime | None, barber_name: str | None) -> list[str]:
        slots = list(self._catalog.time_slots())
        if day is None or not barber_name:
            return slots
        taken = set(self.taken_slots(day, barber_name))
        return [slot for slot in slots if slot not in taken]
