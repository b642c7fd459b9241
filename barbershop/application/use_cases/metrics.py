from __future__ import annotations

from datetime import date

from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.utils.dates import Clock, is_past
from barbershop.application.utils.pricing import parse_price
from barbershop.domain.entities.metrics import SalesMetrics


def most_popular(counts: dict[str, int]) -> str | None:
    """Highest count wins; ties go to the alphabetically first name."""
    if not counts:
        return None
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[0][0]


class MetricsAggregator:
    def __init__(self, store: LedgerStorePort, clock: Clock = date.today) -> None:
        self._store = store
        self._clock = clock

    def compute(self) -> SalesMetrics:
        today = self._clock()
        past = [a for a in self._store.list_appointments() if is_past(a.date, today)]

        total_revenue = 0
        service_counts: dict[str, int] = {}
        barber_counts: dict[str, int] = {}
        for appointment in past:
            total_revenue += parse_price(appointment.service.price)
            service_counts[appointment.service.name] = service_counts.get(appointment.service.name, 0) + 1
            barber_counts[appointment.barber.name] = barber_counts.get(appointment.barber.name, 0) + 1

        return SalesMetrics(
            total_revenue=total_revenue,
            service_counts=service_counts,
            barber_counts=barber_counts,
            most_popular_service=most_popular(service_counts),
            most_popular_barber=most_popular(barber_counts),
            past_appointment_count=len(past),
        )
