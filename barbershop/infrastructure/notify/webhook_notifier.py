from __future__ import annotations

import logging

import httpx

from barbershop.application.exceptions import UpstreamServiceError
from barbershop.application.ports.notifier import NotifierPort


class WebhookNotifier(NotifierPort):
    """Posts notifications as JSON to a mail relay webhook."""

    def __init__(self, endpoint: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def send_notification(self, customer_email: str, subject: str, body: str) -> None:
        payload = {"to": customer_email, "subject": subject, "body": body}
        try:
            resp = self._client.post(self._endpoint, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamServiceError(f"Notification webhook unreachable: {e}") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Notification send failed",
                extra={"status": resp.status_code, "reason": resp.text[:200], "recipient": customer_email},
            )
            raise UpstreamServiceError(f"Notification webhook returned {resp.status_code}.")

    def close(self) -> None:
        self._client.close()
