from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryItem:
    id: int
    name: str
    brand: str
    category: str
    stock: int = 0
    low_stock_threshold: int = 5

    @property
    def is_low(self) -> bool:
        return 0 < self.stock <= self.low_stock_threshold

    @property
    def is_out(self) -> bool:
        return self.stock <= 0
