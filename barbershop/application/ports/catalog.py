from __future__ import annotations

from abc import ABC, abstractmethod

from barbershop.application.exceptions import ValidationError
from barbershop.domain.entities.catalog import Barber, Service


class CatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def list_barbers(self) -> list[Barber]:
        raise NotImplementedError

    @abstractmethod
    def time_slots(self) -> tuple[str, ...]:
        """Fixed ordered sequence of daily slot labels ("HH:MM")."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, name: str) -> Service | None:
        raise NotImplementedError

    @abstractmethod
    def get_barber(self, name: str) -> Barber | None:
        raise NotImplementedError

    def require_service(self, name: str) -> Service:
        service = self.get_service(name)
        if service is None:
            raise ValidationError("UnknownCatalogEntry", f"Unknown service: {name!r}")
        return service

    def require_barber(self, name: str) -> Barber:
        barber = self.get_barber(name)
        if barber is None:
            raise ValidationError("UnknownCatalogEntry", f"Unknown barber: {name!r}")
        return barber

    def is_time_slot(self, label: str) -> bool:
        return label in self.time_slots()
