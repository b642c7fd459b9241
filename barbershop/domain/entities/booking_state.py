from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from barbershop.domain.entities.catalog import Barber, Service


class BookingStage(str, Enum):
    SELECTING_SERVICE_AND_BARBER = "selecting_service_and_barber"
    SELECTING_DATE_AND_TIME = "selecting_date_and_time"
    ENTERING_CUSTOMER_DETAILS = "entering_customer_details"
    CONFIRMED = "confirmed"


STAGE_ORDER: tuple[BookingStage, ...] = (
    BookingStage.SELECTING_SERVICE_AND_BARBER,
    BookingStage.SELECTING_DATE_AND_TIME,
    BookingStage.ENTERING_CUSTOMER_DETAILS,
    BookingStage.CONFIRMED,
)


@dataclass(frozen=True)
class BookingState:
    stage: BookingStage = BookingStage.SELECTING_SERVICE_AND_BARBER
    service: Service | None = None
    barber: Barber | None = None
    date: date | None = None
    time: str | None = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    customer_password_hash: str | None = None
    confirmed_appointment_id: int | None = None
