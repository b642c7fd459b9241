from __future__ import annotations

import pytest

from barbershop.application.use_cases.availability import AvailabilityEngine
from barbershop.application.use_cases.booking import BookingWorkflow
from barbershop.infrastructure.catalog.static_catalog import StaticCatalog
from barbershop.infrastructure.notify.mock_notifier import MockNotifier
from barbershop.infrastructure.store.memory_store import MemoryLedgerStore

from factories import BARBER_B, BARBER_C, COLOR, CUT, fixed_clock


@pytest.fixture
def catalog() -> StaticCatalog:
    return StaticCatalog(
        services=[CUT, COLOR],
        barbers=[BARBER_B, BARBER_C],
        time_slots=["09:00", "10:00", "11:00"],
    )


@pytest.fixture
def store():
    ledger = MemoryLedgerStore(seed=False, clock=fixed_clock())
    ledger.open()
    yield ledger
    ledger.close()


@pytest.fixture
def availability(store, catalog) -> AvailabilityEngine:
    return AvailabilityEngine(store=store, catalog=catalog)


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def make_workflow(store, catalog, availability, notifier):
    def _make(**kwargs) -> BookingWorkflow:
        options = {"notifier": notifier, "clock": fixed_clock()}
        options.update(kwargs)
        return BookingWorkflow(store=store, catalog=catalog, availability=availability, **options)

    return _make
