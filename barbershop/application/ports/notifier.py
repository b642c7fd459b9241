from __future__ import annotations

from abc import ABC, abstractmethod


class NotifierPort(ABC):
    @abstractmethod
    def send_notification(self, customer_email: str, subject: str, body: str) -> None:
        """Deliver a message to a customer. May be slow and may raise."""
        raise NotImplementedError
