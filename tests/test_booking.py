"""
Tests for the three-stage booking workflow.
"""

from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from barbershop.application.exceptions import (
    IncompleteBookingError,
    SlotConflictError,
    ValidationError,
)
from barbershop.application.ports.notifier import NotifierPort
from barbershop.domain.entities.appointment import NewAppointment
from barbershop.domain.entities.booking_state import BookingStage
from barbershop.domain.entities.customer import CustomerData

from factories import BARBER_B, CUT


def _to_details_stage(workflow, day=date(2024, 6, 1), time="09:00", barber="B"):
    workflow.start("Cut", barber)
    workflow.advance()
    workflow.select_date(day)
    workflow.select_time(time)
    workflow.advance()
    return workflow


def test_stages_advance_in_order(make_workflow):
    workflow = make_workflow()
    assert workflow.stage == BookingStage.SELECTING_SERVICE_AND_BARBER

    workflow.select_service("Cut")
    with pytest.raises(ValidationError) as exc:
        workflow.advance()
    assert exc.value.code == "StageIncomplete"

    workflow.select_barber("B")
    assert workflow.advance().stage == BookingStage.SELECTING_DATE_AND_TIME

    with pytest.raises(ValidationError):
        workflow.advance()

    workflow.select_date(date(2024, 6, 1))
    workflow.select_time("11:00")
    assert workflow.advance().stage == BookingStage.ENTERING_CUSTOMER_DETAILS


def test_unknown_catalog_entries_are_rejected(make_workflow):
    workflow = make_workflow()

    with pytest.raises(ValidationError) as exc:
        workflow.select_service("Perm")
    assert exc.value.code == "UnknownCatalogEntry"

    with pytest.raises(ValidationError) as exc:
        workflow.start("Cut", "Nobody")
    assert exc.value.code == "UnknownCatalogEntry"


def test_changing_date_clears_time(make_workflow):
    """Stage 2 with date=2024-06-01 and 11:00 selected; moving to 2024-06-02 drops the time."""
    workflow = make_workflow()
    workflow.start("Cut", "B")
    workflow.advance()
    workflow.select_date(date(2024, 6, 1))
    workflow.select_time("11:00")
    assert workflow.state.time == "11:00"

    workflow.select_date(date(2024, 6, 2))

    assert workflow.state.time is None
    assert workflow.is_stage_complete(BookingStage.SELECTING_DATE_AND_TIME) is False


def test_reselecting_same_date_keeps_time(make_workflow):
    workflow = make_workflow()
    workflow.start("Cut", "B")
    workflow.advance()
    workflow.select_date(date(2024, 6, 1))
    workflow.select_time("10:00")

    workflow.select_date(datetime(2024, 6, 1, 15, 30))

    assert workflow.state.time == "10:00"


def test_back_preserves_entered_data(make_workflow):
    workflow = _to_details_stage(make_workflow())
    workflow.enter_customer_details("Ann", "ann@example.com", "555")

    workflow.back()
    assert workflow.stage == BookingStage.SELECTING_DATE_AND_TIME
    workflow.back()
    assert workflow.stage == BookingStage.SELECTING_SERVICE_AND_BARBER

    state = workflow.state
    assert state.service.name == "Cut"
    assert state.date == date(2024, 6, 1)
    assert state.time == "09:00"
    assert state.customer_email == "ann@example.com"


def test_past_date_is_rejected(make_workflow):
    workflow = make_workflow()
    workflow.start("Cut", "B")
    workflow.advance()

    with pytest.raises(ValidationError) as exc:
        workflow.select_date(date(2024, 5, 19))
    assert exc.value.code == "PastDate"

    # today itself is bookable
    workflow.select_date(date(2024, 5, 20))


def test_selecting_taken_or_unknown_time(make_workflow, store):
    customer = store.upsert_customer(CustomerData(name="Zed", email="zed@example.com"))
    store.add_appointment(
        NewAppointment(customer_id=customer.id, service=CUT, barber=BARBER_B, date=date(2024, 6, 1), time="09:00")
    )
    workflow = make_workflow()
    workflow.start("Cut", "B")
    workflow.advance()
    workflow.select_date(date(2024, 6, 1))

    assert workflow.available_slots() == ["10:00", "11:00"]
    with pytest.raises(SlotConflictError):
        workflow.select_time("09:00")
    with pytest.raises(ValidationError) as exc:
        workflow.select_time("14:00")
    assert exc.value.code == "SlotUnavailable"


def test_customer_details_predicate(make_workflow):
    workflow = _to_details_stage(make_workflow())

    workflow.enter_customer_details("", "ann@example.com")
    assert workflow.is_stage_complete(BookingStage.ENTERING_CUSTOMER_DETAILS) is False

    workflow.enter_customer_details("Ann", "not-an-email")
    assert workflow.is_stage_complete(BookingStage.ENTERING_CUSTOMER_DETAILS) is False

    workflow.enter_customer_details("Ann", "ann@example.com")
    assert workflow.is_stage_complete(BookingStage.ENTERING_CUSTOMER_DETAILS) is True


def test_confirm_requires_every_stage(make_workflow, store):
    workflow = make_workflow()
    workflow.start("Cut", "B")

    with pytest.raises(IncompleteBookingError):
        workflow.confirm()

    _to_details_stage(workflow)
    workflow.enter_customer_details("Ann", "bad-email")
    with pytest.raises(IncompleteBookingError):
        workflow.confirm()

    assert store.list_appointments() == []
    assert store.list_customers() == []


def test_confirm_books_and_notifies(make_workflow, store, notifier):
    workflow = _to_details_stage(make_workflow(), time="10:00")
    workflow.enter_customer_details("Ann", "Ann@Example.com", "555-0000")

    appointment = workflow.confirm()

    assert appointment.barber.name == "B"
    assert appointment.date == date(2024, 6, 1)
    assert appointment.time == "10:00"
    assert [c.email for c in store.list_customers()] == ["ann@example.com"]
    assert len(notifier.sent) == 1
    email, subject, body = notifier.sent[0]
    assert email == "ann@example.com"
    assert "confirmed" in subject
    assert "Cut" in body and "B" in body and "10:00" in body
    # no grace delay configured: back to a fresh booking
    assert workflow.stage == BookingStage.SELECTING_SERVICE_AND_BARBER
    assert workflow.state.service is None


def test_confirm_with_existing_email_updates_customer(make_workflow, store):
    """Booking under a known email updates the phone and reuses the customer row."""
    existing = store.upsert_customer(CustomerData(name="Ann", email="ann@example.com", phone="111"))
    workflow = _to_details_stage(make_workflow())
    workflow.enter_customer_details("Ann", "ANN@example.com", "222")

    appointment = workflow.confirm()

    customers = store.list_customers()
    assert len(customers) == 1
    assert customers[0].id == existing.id
    assert customers[0].phone == "222"
    assert appointment.customer_id == existing.id
    assert appointment.id in [a.id for a in store.list_appointments_for_customer(existing.id)]


def test_confirm_detects_slot_taken_after_selection(make_workflow, store):
    workflow = _to_details_stage(make_workflow())
    workflow.enter_customer_details("Ann", "ann@example.com")

    other = store.upsert_customer(CustomerData(name="Bob", email="bob@example.com"))
    store.add_appointment(
        NewAppointment(customer_id=other.id, service=CUT, barber=BARBER_B, date=date(2024, 6, 1), time="09:00")
    )

    with pytest.raises(SlotConflictError):
        workflow.confirm()

    assert len(store.list_appointments()) == 1
    assert store.find_customer_by_email("ann@example.com") is None


def test_racing_confirmations_book_once(make_workflow, store):
    """Two actors confirm B / 2024-06-01 / 09:00 at the same time: one wins, one conflicts."""
    first = _to_details_stage(make_workflow())
    first.enter_customer_details("Ann", "ann@example.com")
    second = _to_details_stage(make_workflow())
    second.enter_customer_details("Bob", "bob@example.com")

    barrier = threading.Barrier(2)
    outcomes: list[str] = []
    lock = threading.Lock()

    def run(workflow):
        barrier.wait()
        try:
            workflow.confirm()
            result = "booked"
        except SlotConflictError:
            result = "conflict"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=run, args=(w,)) for w in (first, second)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["booked", "conflict"]
    slots = [(a.barber.name, a.date, a.time) for a in store.list_appointments()]
    assert slots == [("B", date(2024, 6, 1), "09:00")]


def test_notification_failure_keeps_booking(make_workflow, store):
    class BrokenNotifier(NotifierPort):
        def send_notification(self, customer_email, subject, body):
            raise RuntimeError("smtp down")

    workflow = _to_details_stage(make_workflow(notifier=BrokenNotifier()))
    workflow.enter_customer_details("Ann", "ann@example.com")

    appointment = workflow.confirm()

    assert [a.id for a in store.list_appointments()] == [appointment.id]


def test_confirmed_stage_held_until_reset(make_workflow):
    workflow = _to_details_stage(make_workflow(reset_delay_seconds=60))
    workflow.enter_customer_details("Ann", "ann@example.com")

    appointment = workflow.confirm()

    assert workflow.stage == BookingStage.CONFIRMED
    assert workflow.state.confirmed_appointment_id == appointment.id
    with pytest.raises(IncompleteBookingError):
        workflow.confirm()
    with pytest.raises(ValidationError):
        workflow.back()

    workflow.reset()
    assert workflow.stage == BookingStage.SELECTING_SERVICE_AND_BARBER


def test_rebook_seeds_service_and_barber_only(make_workflow, store):
    customer = store.upsert_customer(CustomerData(name="Ann", email="ann@example.com"))
    past = store.add_appointment(
        NewAppointment(customer_id=customer.id, service=CUT, barber=BARBER_B, date=date(2024, 4, 1), time="10:00")
    )
    workflow = make_workflow()

    state = workflow.rebook(past)

    assert state.stage == BookingStage.SELECTING_SERVICE_AND_BARBER
    assert state.service.name == "Cut"
    assert state.barber.name == "B"
    assert state.date is None
    assert state.time is None
    assert workflow.is_stage_complete(BookingStage.SELECTING_SERVICE_AND_BARBER)


def test_book_drives_all_stages(make_workflow, store):
    workflow = make_workflow()

    appointment = workflow.book("Color", "C", date(2024, 6, 3), "11:00", "Ann", "ann@example.com", "555")

    assert appointment.service.name == "Color"
    assert store.list_appointments()[0].customer.name == "Ann"
