from __future__ import annotations

import pytest

from barbershop.application.exceptions import ValidationError
from barbershop.application.use_cases.inventory import InventoryManager


def test_add_update_delete(store):
    item = store.add_inventory_item("Pomade", "Reuzel", "Styling", stock=10, low_stock_threshold=3)
    assert item.id == 1
    assert not item.is_low

    updated = store.update_inventory_item(item.id, {"stock": 2, "brand": None})
    assert updated.stock == 2
    assert updated.brand == "Reuzel"
    assert updated.is_low

    assert store.update_inventory_item(99, {"stock": 1}) is None

    store.delete_inventory_item(item.id)
    store.delete_inventory_item(item.id)
    assert store.list_inventory_items() == []


def test_update_rejects_unknown_or_negative_fields(store):
    item = store.add_inventory_item("Beard Oil", "Proraso", "Beard Care", stock=4)

    with pytest.raises(ValidationError) as exc:
        store.update_inventory_item(item.id, {"price": 12})
    assert exc.value.code == "InvalidField"

    with pytest.raises(ValidationError):
        store.update_inventory_item(item.id, {"stock": -1})

    with pytest.raises(ValidationError):
        store.add_inventory_item("Wax", "Layrite", "Styling", stock=-3)

    assert store.get_inventory_item(item.id).stock == 4


def test_adjust_stock_clamps_at_zero(store):
    manager = InventoryManager(store)
    item = store.add_inventory_item("Shampoo", "Nioxin", "Hair Care", stock=6, low_stock_threshold=5)

    assert manager.adjust_stock(item.id, -2).stock == 4
    assert manager.adjust_stock(item.id, -10).stock == 0
    assert manager.adjust_stock(item.id, 3).stock == 3
    assert manager.adjust_stock(404, 1) is None


def test_low_and_out_of_stock(store):
    manager = InventoryManager(store)
    store.add_inventory_item("Pomade", "Reuzel", "Styling", stock=15, low_stock_threshold=5)
    low = store.add_inventory_item("Shampoo", "Nioxin", "Hair Care", stock=3, low_stock_threshold=5)
    out = store.add_inventory_item("Clay", "Baxter", "Styling", stock=0, low_stock_threshold=2)

    assert [i.id for i in manager.low_stock_items()] == [low.id]
    assert [i.id for i in manager.out_of_stock_items()] == [out.id]


def test_gallery_newest_first(store):
    first = store.add_gallery_image("a.png", "Fade", "B")
    second = store.add_gallery_image("b.png", "Crop", "C")

    assert [g.id for g in store.list_gallery_images()] == [second.id, first.id]
    assert [g.id for g in store.list_gallery_images(limit=1)] == [second.id]

    store.delete_gallery_image(second.id)
    assert [g.src for g in store.list_gallery_images()] == ["a.png"]
