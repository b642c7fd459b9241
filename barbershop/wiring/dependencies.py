from functools import lru_cache
import logging

from fastapi import Depends, Request

from barbershop.core.config import settings
from barbershop.application.ports.catalog import CatalogPort
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.ports.notifier import NotifierPort
from barbershop.application.ports.style_advisor import StyleAdvisorPort
from barbershop.application.use_cases.auth import AuthUseCase
from barbershop.application.use_cases.availability import AvailabilityEngine
from barbershop.application.use_cases.booking import BookingWorkflow
from barbershop.application.use_cases.inventory import InventoryManager
from barbershop.application.use_cases.metrics import MetricsAggregator
from barbershop.application.use_cases.profile import ProfileHistoryView
from barbershop.application.use_cases.schedule import ScheduleCalendar
from barbershop.application.use_cases.style_recommender import StyleRecommenderUseCase
from barbershop.infrastructure.ai.mock_advisor import MockStyleAdvisor
from barbershop.infrastructure.ai.openai_advisor import OpenAIStyleAdvisor
from barbershop.infrastructure.catalog.static_catalog import StaticCatalog
from barbershop.infrastructure.notify.mock_notifier import MockNotifier
from barbershop.infrastructure.notify.webhook_notifier import WebhookNotifier
from barbershop.infrastructure.store.json_store import JsonLedgerStore
from barbershop.infrastructure.store.memory_store import MemoryLedgerStore


logger = logging.getLogger(__name__)


def build_ledger_store() -> LedgerStorePort:
    """Construct (but do not open) the ledger configured for this deployment."""
    if settings.LEDGER_PATH and settings.LEDGER_PATH.strip():
        logger.info("Using JsonLedgerStore", extra={"path": settings.LEDGER_PATH})
        return JsonLedgerStore(
            path=settings.LEDGER_PATH,
            seed=settings.LEDGER_SEED,
            reseed_on_corrupt=settings.LEDGER_RESEED_ON_CORRUPT,
        )
    logger.info("Using MemoryLedgerStore (LEDGER_PATH empty)")
    return MemoryLedgerStore(seed=settings.LEDGER_SEED)


def get_ledger_store(request: Request) -> LedgerStorePort:
    return request.app.state.ledger_store


@lru_cache
def get_catalog() -> CatalogPort:
    return StaticCatalog()


@lru_cache
def get_notifier() -> NotifierPort:
    if settings.NOTIFY_WEBHOOK_URL and settings.NOTIFY_WEBHOOK_URL.strip():
        return WebhookNotifier(settings.NOTIFY_WEBHOOK_URL, timeout=settings.NOTIFY_TIMEOUT_SECONDS)
    return MockNotifier()


@lru_cache
def get_style_advisor() -> StyleAdvisorPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAIStyleAdvisor()
    return MockStyleAdvisor()


def get_availability(
    store: LedgerStorePort = Depends(get_ledger_store),
    catalog: CatalogPort = Depends(get_catalog),
) -> AvailabilityEngine:
    return AvailabilityEngine(store=store, catalog=catalog)


def get_booking_workflow(
    store: LedgerStorePort = Depends(get_ledger_store),
    catalog: CatalogPort = Depends(get_catalog),
    availability: AvailabilityEngine = Depends(get_availability),
    notifier: NotifierPort = Depends(get_notifier),
) -> BookingWorkflow:
    # The HTTP surface is stateless, so the workflow lives for one request.
    return BookingWorkflow(
        store=store,
        catalog=catalog,
        availability=availability,
        notifier=notifier,
        reset_delay_seconds=settings.BOOKING_RESET_DELAY_SECONDS,
        salon_name=settings.SALON_NAME,
    )


def get_metrics(store: LedgerStorePort = Depends(get_ledger_store)) -> MetricsAggregator:
    return MetricsAggregator(store=store)


def get_profile_view(store: LedgerStorePort = Depends(get_ledger_store)) -> ProfileHistoryView:
    return ProfileHistoryView(store=store)


def get_schedule(store: LedgerStorePort = Depends(get_ledger_store)) -> ScheduleCalendar:
    return ScheduleCalendar(store=store)


def get_inventory_manager(store: LedgerStorePort = Depends(get_ledger_store)) -> InventoryManager:
    return InventoryManager(store=store)


def get_auth(store: LedgerStorePort = Depends(get_ledger_store)) -> AuthUseCase:
    admins = {settings.ADMIN_EMAIL: settings.ADMIN_PASSWORD} if settings.ADMIN_PASSWORD else {}
    return AuthUseCase(store=store, admin_accounts=admins)


def get_style_recommender(
    advisor: StyleAdvisorPort = Depends(get_style_advisor),
) -> StyleRecommenderUseCase:
    return StyleRecommenderUseCase(advisor=advisor)
