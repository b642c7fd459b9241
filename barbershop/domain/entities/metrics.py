from __future__ import annotations

from dataclasses import dataclass, field

from barbershop.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class SalesMetrics:
    total_revenue: int = 0
    service_counts: dict[str, int] = field(default_factory=dict)
    barber_counts: dict[str, int] = field(default_factory=dict)
    most_popular_service: str | None = None
    most_popular_barber: str | None = None
    past_appointment_count: int = 0


@dataclass(frozen=True)
class CustomerHistory:
    upcoming: list[Appointment] = field(default_factory=list)
    past: list[Appointment] = field(default_factory=list)
