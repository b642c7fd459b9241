from __future__ import annotations

import re
from dataclasses import replace

from barbershop.domain.entities.customer import Customer, CustomerData

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip()))


def merge_customer(existing: Customer, incoming: CustomerData) -> Customer:
    """
    Field-by-field merge: non-empty incoming values overwrite, empty or
    missing values keep the stored ones. The id never changes.
    """
    name = incoming.name.strip()
    email = normalize_email(incoming.email)
    phone = incoming.phone.strip()
    return replace(
        existing,
        name=name or existing.name,
        email=email or existing.email,
        phone=phone or existing.phone,
        password_hash=incoming.password_hash or existing.password_hash,
    )
