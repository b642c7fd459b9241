from __future__ import annotations

import hashlib
import hmac
import logging
import secrets

from barbershop.application.exceptions import AuthenticationError, ValidationError
from barbershop.application.ports.ledger_store import LedgerStorePort
from barbershop.application.utils.customers import is_valid_email, normalize_email
from barbershop.domain.entities.customer import CustomerData
from barbershop.domain.entities.user import User

_ITERATIONS = 120_000


def hash_password(password: str, salt: str | None = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _ITERATIONS)
    return f"pbkdf2_sha256${salt}${digest.hex()}"


def verify_password(password: str, stored: str | None) -> bool:
    if not stored:
        return False
    try:
        scheme, salt, expected = stored.split("$", 2)
    except ValueError:
        return False
    if scheme != "pbkdf2_sha256":
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


class AuthUseCase:
    """
    Credential checks for admins (configured accounts) and clients (customers
    with a stored password). Sessions are the caller's concern.
    """

    def __init__(self, store: LedgerStorePort, admin_accounts: dict[str, str] | None = None) -> None:
        self._store = store
        self._admins = {normalize_email(k): v for k, v in (admin_accounts or {}).items()}
        self._logger = logging.getLogger(__name__)

    def register(self, name: str, email: str, phone: str, password: str) -> User:
        if not name.strip():
            raise ValidationError("InvalidField", "Name is required.")
        if not is_valid_email(email):
            raise ValidationError("InvalidEmail", f"Malformed email: {email!r}")
        if len(password) < 8:
            raise ValidationError("InvalidField", "Password must be at least 8 characters.")
        if normalize_email(email) in self._admins:
            raise ValidationError("DuplicateEmail", "This email is reserved.")

        # A walk-in customer (booked without an account) keeps their id and history;
        # an email that already has a password is refused inside the store.
        customer = self._store.upsert_customer(
            CustomerData(name=name, email=email, phone=phone, password_hash=hash_password(password)),
            require_no_password=True,
        )
        self._logger.info("Customer registered", extra={"customer_id": customer.id})
        return User(username=customer.email, role="client", customer_id=customer.id)

    def login(self, username: str, password: str) -> User:
        normalized = normalize_email(username)
        admin_password = self._admins.get(normalized)
        if admin_password is not None:
            if hmac.compare_digest(admin_password.encode("utf-8"), password.encode("utf-8")):
                return User(username=normalized, role="admin")
            raise AuthenticationError("Invalid credentials.")

        customer = self._store.find_customer_by_email(normalized)
        if customer is None or not verify_password(password, customer.password_hash):
            self._logger.info("Login rejected", extra={"reason": "invalid_credentials"})
            raise AuthenticationError("Invalid credentials.")
        return User(username=customer.email, role="client", customer_id=customer.id)

    def logout(self, user: User) -> None:
        self._logger.info("User logged out", extra={"customer_id": user.customer_id})
