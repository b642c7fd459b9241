from __future__ import annotations

from barbershop.domain.entities.catalog import Barber, Service

SERVICES: tuple[Service, ...] = (
    Service(
        name="AI Precision Cut",
        price="$50",
        description="A cut shaped to your face, guided by our AI face analysis.",
    ),
    Service(
        name="Classic Hot Towel Shave",
        price="$45",
        description="Traditional straight-razor shave with hot towels and premium balms.",
    ),
    Service(
        name="Beard Trim & Shape",
        price="$30",
        description="Expert shaping and conditioning for a sharply sculpted beard.",
    ),
    Service(
        name="Color & Grey Blending",
        price="$60+",
        description="Subtle or bold, expert coloring for a fresh look.",
    ),
    Service(
        name="The Full Package",
        price="$85",
        description="Our AI cut plus a classic hot towel shave.",
    ),
    Service(
        name="Kids Cut (Under 12)",
        price="$30",
        description="A sharp, comfortable cut for young gentlemen.",
    ),
)

BARBERS: tuple[Barber, ...] = (
    Barber(
        name='Alex "The Razor" Russo',
        specialty="Classic Cuts & Fades",
        img="https://picsum.photos/id/1005/400/400",
    ),
    Barber(
        name='Benjamin "Benny" Carter',
        specialty="Modern Styles & Beards",
        img="https://picsum.photos/id/1011/400/400",
    ),
    Barber(
        name='Carlos "Los" Ramirez',
        specialty="Creative Designs & Color",
        img="https://picsum.photos/id/1025/400/400",
    ),
    Barber(
        name="David Chen",
        specialty="Scissor Work & Texture",
        img="https://picsum.photos/id/1040/400/400",
    ),
)

# 14:00 is the midday break
TIME_SLOTS: tuple[str, ...] = (
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "15:00",
    "16:00",
    "17:00",
    "18:00",
)
