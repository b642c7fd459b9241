from __future__ import annotations

import json

import httpx
import pytest

from barbershop.application.exceptions import UpstreamServiceError
from barbershop.infrastructure.notify.webhook_notifier import WebhookNotifier


def _notifier(handler) -> WebhookNotifier:
    return WebhookNotifier("https://relay.example/send", client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_webhook_posts_json_payload():
    received: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(202)

    notifier = _notifier(handler)
    notifier.send_notification("ann@example.com", "Booked", "See you soon")
    notifier.close()

    assert len(received) == 1
    assert str(received[0].url) == "https://relay.example/send"
    assert json.loads(received[0].content) == {"to": "ann@example.com", "subject": "Booked", "body": "See you soon"}


def test_webhook_error_status_raises():
    notifier = _notifier(lambda request: httpx.Response(503, text="relay down"))

    with pytest.raises(UpstreamServiceError):
        notifier.send_notification("ann@example.com", "Booked", "See you soon")


def test_webhook_network_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    notifier = _notifier(handler)

    with pytest.raises(UpstreamServiceError):
        notifier.send_notification("ann@example.com", "Booked", "See you soon")
