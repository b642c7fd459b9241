from __future__ import annotations

from datetime import date

from barbershop.application.exceptions import ValidationError
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.utils.dates import Clock, is_past, is_upcoming
from barbershop.domain.entities.metrics import CustomerHistory


class ProfileHistoryView:
    def __init__(self, store: LedgerStorePort, clock: Clock = date.today) -> None:
        self._store = store
        self._clock = clock

    def history(self, customer_id: int) -> CustomerHistory:
        if self._store.get_customer(customer_id) is None:
            raise ValidationError("UnknownCustomer", f"Customer {customer_id} does not exist.")
        today = self._clock()
        appointments = self._store.list_appointments_for_customer(customer_id)
        return CustomerHistory(
            upcoming=[a for a in appointments if is_upcoming(a.date, today)],
            past=[a for a in appointments if is_past(a.date, today)],
        )
