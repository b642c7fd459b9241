from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from barbershop.domain.entities.appointment import Appointment, NewAppointment
from barbershop.domain.entities.customer import Customer, CustomerData
from barbershop.domain.entities.gallery import GalleryImage
from barbershop.domain.entities.inventory import InventoryItem


class LedgerStorePort(ABC):
    """
    Sole owner of the mutable collections (customers, appointments, inventory, gallery).

    Contract:
    - Reads return snapshots; entities are immutable.
    - Every mutation is persisted before the call returns.
    - Identifiers increase per entity type and are never reused.
    - add_appointment refuses a second appointment for the same (barber, date, time).
    """

    @abstractmethod
    def open(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "LedgerStorePort":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Customers

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        raise NotImplementedError

    @abstractmethod
    def get_customer(self, customer_id: int) -> Customer | None:
        raise NotImplementedError

    @abstractmethod
    def find_customer_by_email(self, email: str) -> Customer | None:
        """Case-insensitive lookup."""
        raise NotImplementedError

    @abstractmethod
    def upsert_customer(
        self,
        data: CustomerData,
        customer_id: int | None = None,
        require_no_password: bool = False,
    ) -> Customer:
        """
        Merge into the customer with `customer_id` or with the same normalized email,
        otherwise insert a new customer. Never produces two customers sharing an email.

        With `require_no_password`, merging into a customer that already has a
        password raises ValidationError("DuplicateEmail") instead.
        """
        raise NotImplementedError

    # Appointments

    @abstractmethod
    def list_appointments(self) -> list[Appointment]:
        """All appointments with their customer resolved, ascending by date then time."""
        raise NotImplementedError

    @abstractmethod
    def list_appointments_for_customer(self, customer_id: int) -> list[Appointment]:
        """Appointments of one customer, most recent first."""
        raise NotImplementedError

    @abstractmethod
    def add_appointment(self, data: NewAppointment) -> Appointment:
        """Insert an appointment. Raises SlotConflictError if the slot is already held."""
        raise NotImplementedError

    # Inventory

    @abstractmethod
    def list_inventory_items(self) -> list[InventoryItem]:
        raise NotImplementedError

    @abstractmethod
    def get_inventory_item(self, item_id: int) -> InventoryItem | None:
        raise NotImplementedError

    @abstractmethod
    def add_inventory_item(
        self, name: str, brand: str, category: str, stock: int = 0, low_stock_threshold: int = 5
    ) -> InventoryItem:
        raise NotImplementedError

    @abstractmethod
    def update_inventory_item(self, item_id: int, changes: dict[str, Any]) -> InventoryItem | None:
        """Partial merge of known fields. Returns None when the id does not exist."""
        raise NotImplementedError

    @abstractmethod
    def adjust_inventory_stock(self, item_id: int, delta: int) -> InventoryItem | None:
        """Add `delta` to the stock, clamped at zero. Returns None when the id does not exist."""
        raise NotImplementedError

    @abstractmethod
    def delete_inventory_item(self, item_id: int) -> None:
        """Idempotent."""
        raise NotImplementedError

    # Gallery

    @abstractmethod
    def list_gallery_images(self, limit: int | None = None) -> list[GalleryImage]:
        """Newest first."""
        raise NotImplementedError

    @abstractmethod
    def add_gallery_image(self, src: str, alt: str, barber_name: str) -> GalleryImage:
        raise NotImplementedError

    @abstractmethod
    def delete_gallery_image(self, image_id: int) -> None:
        """Idempotent."""
        raise NotImplementedError
