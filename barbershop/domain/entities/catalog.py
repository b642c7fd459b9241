from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    name: str
    price: str  # display string, e.g. "$50" or "$60+"
    description: str


@dataclass(frozen=True)
class Barber:
    name: str
    specialty: str
    img: str
