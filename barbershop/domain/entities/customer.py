from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    email: str  # normalized (lower-cased)
    phone: str = ""
    password_hash: str | None = None


@dataclass(frozen=True)
class CustomerData:
    """Incoming customer fields for an upsert. Empty values keep what is stored."""

    name: str = ""
    email: str = ""
    phone: str = ""
    password_hash: str | None = None
