from __future__ import annotations

import logging

from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.domain.entities.inventory import InventoryItem


class InventoryManager:
    def __init__(self, store: LedgerStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def adjust_stock(self, item_id: int, delta: int) -> InventoryItem | None:
        """Add `delta` to the stock count, never going below zero."""
        updated = self._store.adjust_inventory_stock(item_id, delta)
        if updated is not None and updated.is_low:
            self._logger.warning(
                "Low stock",
                extra={"item_id": updated.id, "stock": updated.stock, "reason": updated.name},
            )
        return updated

    def low_stock_items(self) -> list[InventoryItem]:
        return [item for item in self._store.list_inventory_items() if item.is_low]

    def out_of_stock_items(self) -> list[InventoryItem]:
        return [item for item in self._store.list_inventory_items() if item.is_out]
