from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from barbershop.api.v1.schemas import (
    AppointmentSchema,
    CalendarDaySchema,
    GalleryCreateSchema,
    GalleryImageSchema,
    InventoryCreateSchema,
    InventoryItemSchema,
    InventoryUpdateSchema,
    SalesMetricsSchema,
    StockAdjustSchema,
)
from barbershop.application.exceptions import ValidationError
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.use_cases.inventory import InventoryManager
from barbershop.application.use_cases.metrics import MetricsAggregator
from barbershop.application.use_cases.schedule import ScheduleCalendar
from barbershop.wiring.dependencies import (
    get_inventory_manager,
    get_ledger_store,
    get_metrics,
    get_schedule,
)

router = APIRouter()

PUBLIC_GALLERY_SIZE = 8


@router.get("/appointments/calendar", response_model=list[CalendarDaySchema])
def appointments_calendar(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    schedule: ScheduleCalendar = Depends(get_schedule),
):
    grid = schedule.month(year, month)
    return [
        CalendarDaySchema(date=day, appointments=[AppointmentSchema.from_domain(a) for a in appointments])
        for day, appointments in grid.items()
    ]


@router.get("/metrics/sales", response_model=SalesMetricsSchema)
def sales_metrics(metrics: MetricsAggregator = Depends(get_metrics)):
    result = metrics.compute()
    return SalesMetricsSchema(
        total_revenue=result.total_revenue,
        service_counts=result.service_counts,
        barber_counts=result.barber_counts,
        most_popular_service=result.most_popular_service,
        most_popular_barber=result.most_popular_barber,
        past_appointment_count=result.past_appointment_count,
    )


@router.get("/inventory", response_model=list[InventoryItemSchema])
def list_inventory(store: LedgerStorePort = Depends(get_ledger_store)):
    return [InventoryItemSchema.from_domain(i) for i in store.list_inventory_items()]


@router.get("/inventory/low-stock", response_model=list[InventoryItemSchema])
def low_stock(manager: InventoryManager = Depends(get_inventory_manager)):
    return [InventoryItemSchema.from_domain(i) for i in manager.low_stock_items()]


@router.post("/inventory", response_model=InventoryItemSchema, status_code=201)
def add_inventory_item(req: InventoryCreateSchema, store: LedgerStorePort = Depends(get_ledger_store)):
    try:
        item = store.add_inventory_item(
            name=req.name,
            brand=req.brand,
            category=req.category,
            stock=req.stock,
            low_stock_threshold=req.low_stock_threshold,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"code": e.code, "message": str(e)})
    return InventoryItemSchema.from_domain(item)


@router.patch("/inventory/{item_id}", response_model=InventoryItemSchema)
def update_inventory_item(
    item_id: int,
    req: InventoryUpdateSchema,
    store: LedgerStorePort = Depends(get_ledger_store),
):
    try:
        item = store.update_inventory_item(item_id, req.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"code": e.code, "message": str(e)})
    if item is None:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")
    return InventoryItemSchema.from_domain(item)


@router.post("/inventory/{item_id}/adjust", response_model=InventoryItemSchema)
def adjust_stock(
    item_id: int,
    req: StockAdjustSchema,
    manager: InventoryManager = Depends(get_inventory_manager),
):
    item = manager.adjust_stock(item_id, req.delta)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")
    return InventoryItemSchema.from_domain(item)


@router.delete("/inventory/{item_id}", status_code=204)
def delete_inventory_item(item_id: int, store: LedgerStorePort = Depends(get_ledger_store)) -> Response:
    store.delete_inventory_item(item_id)
    return Response(status_code=204)


@router.get("/gallery", response_model=list[GalleryImageSchema])
def list_gallery(store: LedgerStorePort = Depends(get_ledger_store)):
    return [GalleryImageSchema.from_domain(g) for g in store.list_gallery_images()]


@router.get("/gallery/public", response_model=list[GalleryImageSchema])
def public_gallery(store: LedgerStorePort = Depends(get_ledger_store)):
    return [GalleryImageSchema.from_domain(g) for g in store.list_gallery_images(limit=PUBLIC_GALLERY_SIZE)]


@router.post("/gallery", response_model=GalleryImageSchema, status_code=201)
def add_gallery_image(req: GalleryCreateSchema, store: LedgerStorePort = Depends(get_ledger_store)):
    image = store.add_gallery_image(src=req.src, alt=req.alt, barber_name=req.barber_name)
    return GalleryImageSchema.from_domain(image)


@router.delete("/gallery/{image_id}", status_code=204)
def delete_gallery_image(image_id: int, store: LedgerStorePort = Depends(get_ledger_store)) -> Response:
    store.delete_gallery_image(image_id)
    return Response(status_code=204)
