from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GalleryImage:
    id: int
    src: str
    alt: str
    barber_name: str
