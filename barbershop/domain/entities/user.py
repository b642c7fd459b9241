from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    username: str
    role: str  # "admin" or "client"
    customer_id: int | None = None
