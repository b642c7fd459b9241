from __future__ import annotations

from datetime import date, timedelta

from barbershop.domain.entities.appointment import Appointment
from barbershop.domain.entities.customer import Customer
from barbershop.domain.entities.gallery import GalleryImage
from barbershop.domain.entities.inventory import InventoryItem
from barbershop.infrastructure.catalog.catalog_data import BARBERS, SERVICES
from barbershop.infrastructure.store.snapshot import LedgerSnapshot


def build_seed_snapshot(today: date) -> LedgerSnapshot:
    """Built-in dataset used when no persisted state exists. Appointment dates are relative to `today`."""
    return LedgerSnapshot(
        customers=[
            Customer(id=1, name="John Doe", email="john.doe@email.com", phone="555-111-2222"),
            Customer(id=2, name="Jane Smith", email="jane.smith@email.com", phone="555-333-4444"),
        ],
        appointments=[
            Appointment(
                id=1,
                customer_id=1,
                service=SERVICES[0],
                barber=BARBERS[1],
                date=today + timedelta(days=3),
                time="10:00",
            ),
            Appointment(
                id=2,
                customer_id=2,
                service=SERVICES[2],
                barber=BARBERS[0],
                date=today + timedelta(days=5),
                time="15:00",
            ),
            Appointment(
                id=3,
                customer_id=2,
                service=SERVICES[0],
                barber=BARBERS[1],
                date=today - timedelta(days=2),
                time="11:00",
            ),
            Appointment(
                id=4,
                customer_id=1,
                service=SERVICES[4],
                barber=BARBERS[3],
                date=today - timedelta(days=10),
                time="16:00",
            ),
        ],
        inventory=[
            InventoryItem(id=1, name="Strong Hold Pomade", brand="Reuzel", category="Styling", stock=15, low_stock_threshold=5),
            InventoryItem(id=2, name="Beard Oil", brand="Proraso", category="Beard Care", stock=8, low_stock_threshold=4),
            InventoryItem(id=3, name="Thinning Hair Shampoo", brand="Nioxin", category="Hair Care", stock=3, low_stock_threshold=5),
        ],
        # newest first
        gallery=[
            GalleryImage(id=4, src="https://picsum.photos/seed/hair4/500/500", alt="Textured long cut", barber_name="David Chen"),
            GalleryImage(id=3, src="https://picsum.photos/seed/hair3/500/500", alt="Creative hair design", barber_name='Carlos "Los" Ramirez'),
            GalleryImage(id=2, src="https://picsum.photos/seed/hair2/500/500", alt="Classic fade", barber_name='Alex "The Razor" Russo'),
            GalleryImage(id=1, src="https://picsum.photos/seed/hair1/500/500", alt="Modern haircut", barber_name='Benjamin "Benny" Carter'),
        ],
        next_ids={"customer": 3, "appointment": 5, "inventory": 4, "gallery": 5},
    )
