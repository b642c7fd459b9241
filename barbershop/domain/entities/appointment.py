from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from barbershop.domain.entities.catalog import Barber, Service
from barbershop.domain.entities.customer import Customer


def to_calendar_date(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class NewAppointment:
    customer_id: int
    service: Service
    barber: Barber
    date: date
    time: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", to_calendar_date(self.date))


@dataclass(frozen=True)
class Appointment:
    id: int
    customer_id: int
    service: Service  # copy taken at booking time
    barber: Barber  # copy taken at booking time
    date: date
    time: str
    customer: Customer | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", to_calendar_date(self.date))

    def occupies(self, day: date, time: str, barber_name: str) -> bool:
        return self.barber.name == barber_name and self.time == time and self.date == day
