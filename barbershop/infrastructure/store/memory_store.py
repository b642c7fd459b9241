from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Any

from barbershop.application.exceptions import SlotConflictError, ValidationError
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.utils.customers import is_valid_email, merge_customer, normalize_email
from barbershop.application.utils.dates import Clock
from barbershop.domain.entities.appointment import Appointment, NewAppointment
from barbershop.domain.entities.customer import Customer, CustomerData
from barbershop.domain.entities.gallery import GalleryImage
from barbershop.domain.entities.inventory import InventoryItem
from barbershop.infrastructure.store.seed import build_seed_snapshot
from barbershop.infrastructure.store.snapshot import LedgerSnapshot

INVENTORY_FIELDS = ("name", "brand", "category", "stock", "low_stock_threshold")


class MemoryLedgerStore(LedgerStorePort):
    """
    In-process ledger. Every operation is serialized by one re-entrant lock.

    Subclasses provide durability by overriding `_load_initial` and `_persist`;
    a mutation whose persist step fails is rolled back in memory.
    """

    def __init__(self, seed: bool = True, clock: Clock = date.today) -> None:
        self._seed = seed
        self._clock = clock
        self._lock = threading.RLock()
        self._state = LedgerSnapshot()
        self._is_open = False
        self._logger = logging.getLogger(__name__)

    # Lifecycle

    def open(self) -> None:
        with self._lock:
            if self._is_open:
                return
            self._state = self._load_initial()
            self._is_open = True
            self._logger.info(
                "Ledger opened",
                extra={
                    "customers": len(self._state.customers),
                    "appointments": len(self._state.appointments),
                },
            )

    def close(self) -> None:
        with self._lock:
            self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def _load_initial(self) -> LedgerSnapshot:
        if self._seed:
            return build_seed_snapshot(self._clock())
        return LedgerSnapshot()

    def _persist(self, snapshot: LedgerSnapshot) -> None:
        """Durably write the full snapshot. Nothing to do in memory."""
        pass

    @contextmanager
    def _reading(self) -> Iterator[LedgerSnapshot]:
        with self._lock:
            self._ensure_open()
            yield self._state

    @contextmanager
    def _mutation(self) -> Iterator[LedgerSnapshot]:
        with self._lock:
            self._ensure_open()
            backup = self._state.copy()
            try:
                yield self._state
                self._persist(self._state)
            except Exception:
                self._state = backup
                raise

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise RuntimeError("Ledger store is not open.")

    def _allocate_id(self, kind: str) -> int:
        next_id = self._state.next_ids[kind]
        self._state.next_ids[kind] = next_id + 1
        return next_id

    # Customers

    def list_customers(self) -> list[Customer]:
        with self._reading() as state:
            return list(state.customers)

    def get_customer(self, customer_id: int) -> Customer | None:
        with self._reading() as state:
            return _find_by_id(state.customers, customer_id)

    def find_customer_by_email(self, email: str) -> Customer | None:
        normalized = normalize_email(email)
        with self._reading() as state:
            return next((c for c in state.customers if c.email == normalized), None)

    def upsert_customer(
        self,
        data: CustomerData,
        customer_id: int | None = None,
        require_no_password: bool = False,
    ) -> Customer:
        email = normalize_email(data.email)
        if email and not is_valid_email(email):
            raise ValidationError("InvalidEmail", f"Malformed email: {data.email!r}")

        with self._mutation() as state:
            owner = next((c for c in state.customers if email and c.email == email), None)
            if customer_id is not None:
                existing = _find_by_id(state.customers, customer_id)
                if existing is None:
                    raise ValidationError("UnknownCustomer", f"Customer {customer_id} does not exist.")
                if owner is not None and owner.id != existing.id:
                    raise ValidationError("DuplicateEmail", f"{email} already belongs to another customer.")
            else:
                existing = owner

            if existing is not None and require_no_password and existing.password_hash:
                raise ValidationError("DuplicateEmail", "An account already exists for this email.")

            if existing is not None:
                merged = merge_customer(existing, data)
                state.customers = [merged if c.id == existing.id else c for c in state.customers]
                customer = merged
            else:
                if not email:
                    raise ValidationError("InvalidEmail", "An email is required to register a customer.")
                customer = Customer(
                    id=self._allocate_id("customer"),
                    name=data.name.strip(),
                    email=email,
                    phone=data.phone.strip(),
                    password_hash=data.password_hash,
                )
                state.customers.append(customer)

        self._logger.info("Customer saved", extra={"customer_id": customer.id})
        return customer

    # Appointments

    def list_appointments(self) -> list[Appointment]:
        with self._reading() as state:
            customers = {c.id: c for c in state.customers}
            enriched = [replace(a, customer=customers.get(a.customer_id)) for a in state.appointments]
        return sorted(enriched, key=lambda a: (a.date, a.time))

    def list_appointments_for_customer(self, customer_id: int) -> list[Appointment]:
        with self._reading() as state:
            own = [a for a in state.appointments if a.customer_id == customer_id]
        return sorted(own, key=lambda a: (a.date, a.time), reverse=True)

    def add_appointment(self, data: NewAppointment) -> Appointment:
        with self._mutation() as state:
            if _find_by_id(state.customers, data.customer_id) is None:
                raise ValidationError("UnknownCustomer", f"Customer {data.customer_id} does not exist.")
            # Uniqueness is re-checked here, under the same lock as the insert.
            if any(a.occupies(data.date, data.time, data.barber.name) for a in state.appointments):
                raise SlotConflictError(data.barber.name, data.date, data.time)
            appointment = Appointment(
                id=self._allocate_id("appointment"),
                customer_id=data.customer_id,
                service=data.service,
                barber=data.barber,
                date=data.date,
                time=data.time,
            )
            state.appointments.append(appointment)

        self._logger.info(
            "Appointment added",
            extra={
                "appointment_id": appointment.id,
                "customer_id": appointment.customer_id,
                "barber": appointment.barber.name,
                "date": appointment.date.isoformat(),
                "time": appointment.time,
            },
        )
        return appointment

    # Inventory

    def list_inventory_items(self) -> list[InventoryItem]:
        with self._reading() as state:
            return list(state.inventory)

    def get_inventory_item(self, item_id: int) -> InventoryItem | None:
        with self._reading() as state:
            return _find_by_id(state.inventory, item_id)

    def add_inventory_item(
        self, name: str, brand: str, category: str, stock: int = 0, low_stock_threshold: int = 5
    ) -> InventoryItem:
        _check_count("stock", stock)
        _check_count("low_stock_threshold", low_stock_threshold)
        with self._mutation() as state:
            item = InventoryItem(
                id=self._allocate_id("inventory"),
                name=name,
                brand=brand,
                category=category,
                stock=stock,
                low_stock_threshold=low_stock_threshold,
            )
            state.inventory.append(item)
        return item

    def update_inventory_item(self, item_id: int, changes: dict[str, Any]) -> InventoryItem | None:
        unknown = set(changes) - set(INVENTORY_FIELDS)
        if unknown:
            raise ValidationError("InvalidField", f"Unknown inventory fields: {sorted(unknown)}")
        updates = {key: value for key, value in changes.items() if value is not None}
        for key in ("stock", "low_stock_threshold"):
            if key in updates:
                _check_count(key, updates[key])

        with self._mutation() as state:
            existing = _find_by_id(state.inventory, item_id)
            if existing is None:
                return None
            updated = replace(existing, **updates)
            state.inventory = [updated if i.id == item_id else i for i in state.inventory]
        return updated

    def adjust_inventory_stock(self, item_id: int, delta: int) -> InventoryItem | None:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("InvalidField", "delta must be an integer.")
        with self._mutation() as state:
            existing = _find_by_id(state.inventory, item_id)
            if existing is None:
                return None
            updated = replace(existing, stock=max(0, existing.stock + delta))
            state.inventory = [updated if i.id == item_id else i for i in state.inventory]
        return updated

    def delete_inventory_item(self, item_id: int) -> None:
        with self._mutation() as state:
            state.inventory = [i for i in state.inventory if i.id != item_id]

    # Gallery

    def list_gallery_images(self, limit: int | None = None) -> list[GalleryImage]:
        with self._reading() as state:
            images = list(state.gallery)
        return images if limit is None else images[:limit]

    def add_gallery_image(self, src: str, alt: str, barber_name: str) -> GalleryImage:
        with self._mutation() as state:
            image = GalleryImage(
                id=self._allocate_id("gallery"),
                src=src,
                alt=alt,
                barber_name=barber_name,
            )
            state.gallery.insert(0, image)
        return image

    def delete_gallery_image(self, image_id: int) -> None:
        with self._mutation() as state:
            state.gallery = [g for g in state.gallery if g.id != image_id]


def _find_by_id(items: list[Any], item_id: int) -> Any:
    return next((item for item in items if item.id == item_id), None)


def _check_count(field_name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError("InvalidField", f"{field_name} must be a non-negative integer.")
