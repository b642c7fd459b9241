from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from barbershop.api.v1.schemas import (
    AppointmentSchema,
    AvailabilitySchema,
    BarberSchema,
    BookingRequestSchema,
    CustomerHistorySchema,
    CustomerSchema,
    ServiceSchema,
    TimeSlotsSchema,
)
from barbershop.application.exceptions import SlotConflictError, ValidationError
from barbershop.application.ports.catalog import CatalogPort
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.use_cases.availability import AvailabilityEngine
from barbershop.application.use_cases.booking import BookingWorkflow
from barbershop.application.use_cases.profile import ProfileHistoryView
from barbershop.wiring.dependencies import (
    get_availability,
    get_booking_workflow,
    get_catalog,
    get_ledger_store,
    get_profile_view,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/catalog/services", response_model=list[ServiceSchema])
def list_services(catalog: CatalogPort = Depends(get_catalog)):
    return [ServiceSchema.from_domain(s) for s in catalog.list_services()]


@router.get("/catalog/barbers", response_model=list[BarberSchema])
def list_barbers(catalog: CatalogPort = Depends(get_catalog)):
    return [BarberSchema.from_domain(b) for b in catalog.list_barbers()]


@router.get("/catalog/time-slots", response_model=TimeSlotsSchema)
def list_time_slots(catalog: CatalogPort = Depends(get_catalog)):
    return TimeSlotsSchema(slots=list(catalog.time_slots()))


@router.get("/availability", response_model=AvailabilitySchema)
def availability(
    day: date | None = Query(None, alias="date"),
    barber: str | None = Query(None),
    engine: AvailabilityEngine = Depends(get_availability),
    catalog: CatalogPort = Depends(get_catalog),
):
    if barber and catalog.get_barber(barber) is None:
        raise HTTPException(status_code=404, detail=f"Unknown barber: {barber}")
    taken = engine.taken_slots(day, barber) if day and barber else []
    return AvailabilitySchema(
        barber=barber,
        date=day,
        available=engine.available_slots(day, barber),
        taken=taken,
    )


@router.post("/appointments", response_model=AppointmentSchema, status_code=201)
def book_appointment(
    req: BookingRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
):
    try:
        appointment = workflow.book(
            service_name=req.service,
            barber_name=req.barber,
            day=req.date,
            time=req.time,
            name=req.customer.name,
            email=req.customer.email,
            phone=req.customer.phone,
        )
    except SlotConflictError as e:
        logger.info("Booking rejected", extra={"reason": "slot_conflict", "barber": e.barber_name, "time": e.time})
        raise HTTPException(status_code=409, detail=f"{e} Please pick another time.")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"code": e.code, "message": str(e)})

    return AppointmentSchema.from_domain(appointment)


@router.get("/appointments", response_model=list[AppointmentSchema])
def list_appointments(store: LedgerStorePort = Depends(get_ledger_store)):
    return [AppointmentSchema.from_domain(a) for a in store.list_appointments()]


@router.get("/customers", response_model=list[CustomerSchema])
def list_customers(store: LedgerStorePort = Depends(get_ledger_store)):
    return [CustomerSchema.from_domain(c) for c in store.list_customers()]


@router.get("/customers/{customer_id}/history", response_model=CustomerHistorySchema)
def customer_history(
    customer_id: int,
    view: ProfileHistoryView = Depends(get_profile_view),
):
    try:
        history = view.history(customer_id)
    except ValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return CustomerHistorySchema(
        upcoming=[AppointmentSchema.from_domain(a) for a in history.upcoming],
        past=[AppointmentSchema.from_domain(a) for a in history.past],
    )
