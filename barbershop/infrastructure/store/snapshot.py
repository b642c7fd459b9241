from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from barbershop.application.exceptions import CorruptStateError
from barbershop.application.utils.customers import normalize_email
from barbershop.domain.entities.appointment import Appointment
from barbershop.domain.entities.catalog import Barber, Service
from barbershop.domain.entities.customer import Customer
from barbershop.domain.entities.gallery import GalleryImage
from barbershop.domain.entities.inventory import InventoryItem

ENTITY_KINDS = ("customer", "appointment", "inventory", "gallery")


@dataclass
class LedgerSnapshot:
    customers: list[Customer] = field(default_factory=list)
    appointments: list[Appointment] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)
    gallery: list[GalleryImage] = field(default_factory=list)
    next_ids: dict[str, int] = field(default_factory=lambda: {kind: 1 for kind in ENTITY_KINDS})

    def copy(self) -> "LedgerSnapshot":
        return LedgerSnapshot(
            customers=list(self.customers),
            appointments=list(self.appointments),
            inventory=list(self.inventory),
            gallery=list(self.gallery),
            next_ids=dict(self.next_ids),
        )


# Persisted shape. Strict so that wrong types are reported instead of coerced.


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class _ServiceModel(_Model):
    name: str
    price: str
    description: str


class _BarberModel(_Model):
    name: str
    specialty: str
    img: str


class _CustomerModel(_Model):
    id: int = Field(ge=1)
    name: str
    email: str = Field(min_length=3)
    phone: str = ""
    password: str | None = None


class _AppointmentModel(_Model):
    id: int = Field(ge=1)
    customerId: int
    service: _ServiceModel
    barber: _BarberModel
    date: date
    time: str = Field(pattern=r"^\d{2}:\d{2}$")

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        # Accept full ISO timestamps and keep only the calendar date.
        if isinstance(value, str):
            try:
                if len(value) > 10:
                    return datetime.fromisoformat(value).date()
                return date.fromisoformat(value)
            except ValueError as e:
                raise ValueError(f"invalid ISO date {value!r}") from e
        return value


class _InventoryModel(_Model):
    id: int = Field(ge=1)
    name: str
    brand: str
    category: str
    stock: int = Field(ge=0)
    lowStockThreshold: int = Field(ge=0)


class _GalleryModel(_Model):
    id: int = Field(ge=1)
    src: str
    alt: str
    barberName: str


class _NextIdsModel(_Model):
    customer: int = Field(ge=1)
    appointment: int = Field(ge=1)
    inventory: int = Field(ge=1)
    gallery: int = Field(ge=1)


class _LedgerModel(_Model):
    customers: list[_CustomerModel]
    appointments: list[_AppointmentModel]
    inventory: list[_InventoryModel]
    gallery: list[_GalleryModel]
    nextIds: _NextIdsModel


def serialize_snapshot(snapshot: LedgerSnapshot) -> dict[str, Any]:
    return {
        "customers": [
            {
                "id": c.id,
                "name": c.name,
                "email": c.email,
                "phone": c.phone,
                "password": c.password_hash,
            }
            for c in snapshot.customers
        ],
        "appointments": [
            {
                "id": a.id,
                "customerId": a.customer_id,
                "service": {
                    "name": a.service.name,
                    "price": a.service.price,
                    "description": a.service.description,
                },
                "barber": {
                    "name": a.barber.name,
                    "specialty": a.barber.specialty,
                    "img": a.barber.img,
                },
                "date": a.date.isoformat(),
                "time": a.time,
            }
            for a in snapshot.appointments
        ],
        "inventory": [
            {
                "id": i.id,
                "name": i.name,
                "brand": i.brand,
                "category": i.category,
                "stock": i.stock,
                "lowStockThreshold": i.low_stock_threshold,
            }
            for i in snapshot.inventory
        ],
        "gallery": [
            {"id": g.id, "src": g.src, "alt": g.alt, "barberName": g.barber_name}
            for g in snapshot.gallery
        ],
        "nextIds": dict(snapshot.next_ids),
    }


def deserialize_snapshot(raw: str | bytes) -> LedgerSnapshot:
    """Parse persisted JSON. Raises CorruptStateError on any shape or integrity problem."""
    try:
        model = _LedgerModel.model_validate_json(raw)
    except ValidationError as e:
        raise CorruptStateError(f"Ledger state does not match the expected layout: {e}") from e

    snapshot = LedgerSnapshot(
        customers=[
            Customer(
                id=c.id,
                name=c.name,
                email=normalize_email(c.email),
                phone=c.phone,
                password_hash=c.password,
            )
            for c in model.customers
        ],
        appointments=[
            Appointment(
                id=a.id,
                customer_id=a.customerId,
                service=Service(name=a.service.name, price=a.service.price, description=a.service.description),
                barber=Barber(name=a.barber.name, specialty=a.barber.specialty, img=a.barber.img),
                date=a.date,
                time=a.time,
            )
            for a in model.appointments
        ],
        inventory=[
            InventoryItem(
                id=i.id,
                name=i.name,
                brand=i.brand,
                category=i.category,
                stock=i.stock,
                low_stock_threshold=i.lowStockThreshold,
            )
            for i in model.inventory
        ],
        gallery=[
            GalleryImage(id=g.id, src=g.src, alt=g.alt, barber_name=g.barberName)
            for g in model.gallery
        ],
        next_ids=model.nextIds.model_dump(),
    )
    _check_integrity(snapshot)
    return snapshot


def _check_integrity(snapshot: LedgerSnapshot) -> None:
    collections = {
        "customer": [c.id for c in snapshot.customers],
        "appointment": [a.id for a in snapshot.appointments],
        "inventory": [i.id for i in snapshot.inventory],
        "gallery": [g.id for g in snapshot.gallery],
    }
    for kind, ids in collections.items():
        if len(set(ids)) != len(ids):
            raise CorruptStateError(f"Duplicate {kind} ids in ledger state.")
        if ids and snapshot.next_ids[kind] <= max(ids):
            raise CorruptStateError(f"nextIds.{kind} would reuse an existing id.")

    emails = [c.email for c in snapshot.customers]
    if len(set(emails)) != len(emails):
        raise CorruptStateError("Two customers share the same email.")

    slots = [(a.barber.name, a.date, a.time) for a in snapshot.appointments]
    if len(set(slots)) != len(slots):
        raise CorruptStateError("Ledger state contains a double booking.")
