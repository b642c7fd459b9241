from __future__ import annotations

from collections.abc import Iterable

from barbershop.application.ports.catalog import CatalogPort
from barbershop.domain.entities.catalog import Barber, Service
from barbershop.infrastructure.catalog.catalog_data import BARBERS, SERVICES, TIME_SLOTS


class StaticCatalog(CatalogPort):
    def __init__(
        self,
        services: Iterable[Service] | None = None,
        barbers: Iterable[Barber] | None = None,
        time_slots: Iterable[str] | None = None,
    ) -> None:
        self._services = {s.name: s for s in (SERVICES if services is None else services)}
        self._barbers = {b.name: b for b in (BARBERS if barbers is None else barbers)}
        self._time_slots = tuple(TIME_SLOTS if time_slots is None else time_slots)

    def list_services(self) -> list[Service]:
        return list(self._services.values())

    def list_barbers(self) -> list[Barber]:
        return list(self._barbers.values())

    def time_slots(self) -> tuple[str, ...]:
        return self._time_slots

    def get_service(self, name: str) -> Service | None:
        return self._services.get(name.strip())

    def get_barber(self, name: str) -> Barber | None:
        return self._barbers.get(name.strip())
