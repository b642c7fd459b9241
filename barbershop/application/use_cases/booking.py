from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, datetime

from barbershop.application.exceptions import (
    IncompleteBookingError,
    SlotConflictError,
    ValidationError,
)
from barbershop.application.ports.catalog import CatalogPort
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.ports.notifier import NotifierPort
from barbershop.application.use_cases.availability import AvailabilityEngine
from barbershop.application.utils.customers import is_valid_email
from barbershop.application.utils.dates import Clock
from barbershop.domain.entities.appointment import Appointment, NewAppointment, to_calendar_date
from barbershop.domain.entities.booking_state import STAGE_ORDER, BookingStage, BookingState
from barbershop.domain.entities.customer import Customer, CustomerData


class BookingWorkflow:
    """
    Three-stage booking flow for a single actor:
    service + barber -> date + time -> customer details -> confirmed.

    Stages move one step forward (when the current stage is complete) or one
    step back (keeping what was entered). Confirmation re-checks the slot and
    the ledger re-checks it again at insert time.
    """

    def __init__(
        self,
        store: LedgerStorePort,
        catalog: CatalogPort,
        availability: AvailabilityEngine,
        notifier: NotifierPort | None = None,
        clock: Clock = date.today,
        reset_delay_seconds: float = 0.0,
        salon_name: str = "AI Barber",
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._availability = availability
        self._notifier = notifier
        self._clock = clock
        self._reset_delay_seconds = reset_delay_seconds
        self._salon_name = salon_name
        self._state = BookingState()
        self._lock = threading.RLock()
        self._reset_timer: threading.Timer | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def stage(self) -> BookingStage:
        return self._state.stage

    # Entry points

    def start(self, service_name: str | None = None, barber_name: str | None = None) -> BookingState:
        """Open a fresh booking, optionally pre-seeded with a service and/or barber."""
        service = self._catalog.require_service(service_name) if service_name else None
        barber = self._catalog.require_barber(barber_name) if barber_name else None
        with self._lock:
            self._cancel_reset_timer()
            self._state = BookingState(service=service, barber=barber)
            return self._state

    def rebook(self, appointment: Appointment) -> BookingState:
        """Start over with the service and barber of a previous appointment. Date and time stay empty."""
        return self.start(appointment.service.name, appointment.barber.name)

    def reset(self) -> BookingState:
        with self._lock:
            self._cancel_reset_timer()
            self._state = BookingState()
            return self._state

    # Stage 1

    def select_service(self, name: str) -> BookingState:
        service = self._catalog.require_service(name)
        with self._lock:
            self._require_stage(BookingStage.SELECTING_SERVICE_AND_BARBER)
            self._state = replace(self._state, service=service)
            return self._state

    def select_barber(self, name: str) -> BookingState:
        barber = self._catalog.require_barber(name)
        with self._lock:
            self._require_stage(BookingStage.SELECTING_SERVICE_AND_BARBER)
            changed = self._state.barber is None or self._state.barber.name != barber.name
            # A time picked for another barber is not assumed free for this one.
            self._state = replace(self._state, barber=barber, time=None if changed else self._state.time)
            return self._state

    # Stage 2

    def select_date(self, value: date | datetime) -> BookingState:
        day = to_calendar_date(value)
        if day < self._clock():
            raise ValidationError("PastDate", f"{day.isoformat()} is in the past.")
        with self._lock:
            self._require_stage(BookingStage.SELECTING_DATE_AND_TIME)
            changed = self._state.date != day
            self._state = replace(self._state, date=day, time=None if changed else self._state.time)
            return self._state

    def select_time(self, time: str) -> BookingState:
        with self._lock:
            self._require_stage(BookingStage.SELECTING_DATE_AND_TIME)
            state = self._state
            if state.date is None:
                raise ValidationError("StageIncomplete", "Pick a date before picking a time.")
            if not self._catalog.is_time_slot(time):
                raise ValidationError("SlotUnavailable", f"{time!r} is not a bookable time slot.")
            if time not in self._availability.available_slots(state.date, state.barber.name):
                raise SlotConflictError(state.barber.name, state.date, time)
            self._state = replace(state, time=time)
            return self._state

    def available_slots(self) -> list[str]:
        state = self._state
        return self._availability.available_slots(state.date, state.barber.name if state.barber else None)

    # Stage 3

    def enter_customer_details(
        self,
        name: str,
        email: str,
        phone: str = "",
        password_hash: str | None = None,
    ) -> BookingState:
        with self._lock:
            self._require_stage(BookingStage.ENTERING_CUSTOMER_DETAILS)
            self._state = replace(
                self._state,
                customer_name=name.strip(),
                customer_email=email.strip(),
                customer_phone=phone.strip(),
                customer_password_hash=password_hash,
            )
            return self._state

    # Navigation

    def is_stage_complete(self, stage: BookingStage) -> bool:
        state = self._state
        if stage == BookingStage.SELECTING_SERVICE_AND_BARBER:
            return self._service_and_barber_selected(state)
        if stage == BookingStage.SELECTING_DATE_AND_TIME:
            return (
                self._date_and_time_selected(state)
                and state.barber is not None
                and state.time in self._availability.available_slots(state.date, state.barber.name)
            )
        if stage == BookingStage.ENTERING_CUSTOMER_DETAILS:
            return self._customer_details_entered(state)
        return stage == BookingStage.CONFIRMED and state.stage == BookingStage.CONFIRMED

    def advance(self) -> BookingState:
        with self._lock:
            current = self._state.stage
            if current in (BookingStage.ENTERING_CUSTOMER_DETAILS, BookingStage.CONFIRMED):
                raise ValidationError("WrongStage", "Use confirm() to finish the booking.")
            if not self.is_stage_complete(current):
                raise ValidationError("StageIncomplete", f"Stage {current.value} is not complete.")
            self._state = replace(self._state, stage=STAGE_ORDER[STAGE_ORDER.index(current) + 1])
            return self._state

    def back(self) -> BookingState:
        with self._lock:
            current = self._state.stage
            if current == BookingStage.CONFIRMED:
                raise ValidationError("WrongStage", "A confirmed booking cannot be revised.")
            index = STAGE_ORDER.index(current)
            if index > 0:
                self._state = replace(self._state, stage=STAGE_ORDER[index - 1])
            return self._state

    # Confirmation

    def confirm(self) -> Appointment:
        with self._lock:
            state = self._state
            if state.stage == BookingStage.CONFIRMED or not (
                self._service_and_barber_selected(state)
                and self._date_and_time_selected(state)
                and self._customer_details_entered(state)
            ):
                raise IncompleteBookingError()

            if self._availability.is_slot_taken(state.date, state.time, state.barber.name):
                raise SlotConflictError(state.barber.name, state.date, state.time)

            customer = self._store.upsert_customer(
                CustomerData(
                    name=state.customer_name,
                    email=state.customer_email,
                    phone=state.customer_phone,
                    password_hash=state.customer_password_hash,
                )
            )
            appointment = self._store.add_appointment(
                NewAppointment(
                    customer_id=customer.id,
                    service=state.service,
                    barber=state.barber,
                    date=state.date,
                    time=state.time,
                )
            )
            self._state = replace(
                state,
                stage=BookingStage.CONFIRMED,
                confirmed_appointment_id=appointment.id,
            )

        self._logger.info(
            "Booking confirmed",
            extra={
                "appointment_id": appointment.id,
                "customer_id": customer.id,
                "barber": appointment.barber.name,
                "date": appointment.date.isoformat(),
                "time": appointment.time,
            },
        )
        self._send_confirmation(customer, appointment)
        self._schedule_reset()
        return appointment

    def book(
        self,
        service_name: str,
        barber_name: str,
        day: date | datetime,
        time: str,
        name: str,
        email: str,
        phone: str = "",
        password_hash: str | None = None,
    ) -> Appointment:
        """Drive every stage in order and confirm."""
        self.start(service_name, barber_name)
        self.advance()
        self.select_date(day)
        self.select_time(time)
        self.advance()
        self.enter_customer_details(name, email, phone, password_hash)
        return self.confirm()

    # Internals

    def _service_and_barber_selected(self, state: BookingState) -> bool:
        return (
            state.service is not None
            and state.barber is not None
            and self._catalog.get_service(state.service.name) is not None
            and self._catalog.get_barber(state.barber.name) is not None
        )

    def _date_and_time_selected(self, state: BookingState) -> bool:
        return (
            state.date is not None
            and state.date >= self._clock()
            and state.time is not None
            and self._catalog.is_time_slot(state.time)
        )

    def _customer_details_entered(self, state: BookingState) -> bool:
        return bool(state.customer_name) and is_valid_email(state.customer_email)

    def _require_stage(self, stage: BookingStage) -> None:
        if self._state.stage != stage:
            raise ValidationError(
                "WrongStage",
                f"Expected stage {stage.value}, booking is at {self._state.stage.value}.",
            )

    def _send_confirmation(self, customer: Customer, appointment: Appointment) -> None:
        if self._notifier is None:
            return
        subject = f"Your appointment at {self._salon_name} is confirmed"
        body = (
            f"Hi {customer.name},\n\n"
            f"Your {appointment.service.name} with {appointment.barber.name} is confirmed "
            f"for {appointment.date.strftime('%B %d, %Y')} at {appointment.time}.\n"
        )
        try:
            self._notifier.send_notification(customer.email, subject, body)
        except Exception as e:
            # The booking is already committed; delivery problems are reported, not rolled back.
            self._logger.error(
                "Booking notification failed",
                extra={"appointment_id": appointment.id, "reason": str(e)},
            )

    def _schedule_reset(self) -> None:
        if self._reset_delay_seconds <= 0:
            self.reset()
            return
        with self._lock:
            self._cancel_reset_timer()
            timer = threading.Timer(self._reset_delay_seconds, self._reset_if_confirmed)
            timer.daemon = True
            self._reset_timer = timer
            timer.start()

    def _reset_if_confirmed(self) -> None:
        with self._lock:
            if self._state.stage == BookingStage.CONFIRMED:
                self._state = BookingState()
            self._reset_timer = None

    def _cancel_reset_timer(self) -> None:
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None
