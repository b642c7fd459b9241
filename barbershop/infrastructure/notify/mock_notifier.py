from __future__ import annotations

import logging

from barbershop.application.ports.notifier import NotifierPort


class MockNotifier(NotifierPort):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self._logger = logging.getLogger(__name__)

    def send_notification(self, customer_email: str, subject: str, body: str) -> None:
        self.sent.append((customer_email, subject, body))
        self._logger.info("Mock notification", extra={"recipient": customer_email, "subject": subject})
