import pytest
import requests

from loom.services import notification_service
from loom.services.notification_service import (
    NotificationService,
    format_amount,
    send_order_confirmation_task,
)
from loom.utils import settings


def test_format_amount():
    assert format_amount(12345678) == "₹123,456.78"
    assert format_amount(5) == "₹0.05"


def test_skipped_without_api_key(monkeypatch, mocker):
    monkeypatch.setattr(settings, "SENDGRID_API_KEY", "")
    post = mocker.patch.object(notification_service.requests, "post")

    result = send_order_confirmation_task("asha@example.com", "order-1", 1000)

    assert result == {"order_id": "order-1", "status": "skipped"}
    post.assert_not_called()


def test_sends_plain_text_email(monkeypatch, mocker):
    monkeypatch.setattr(settings, "SENDGRID_API_KEY", "SG.test")
    post = mocker.patch.object(notification_service.requests, "post")

    result = send_order_confirmation_task("asha@example.com", "order-1", 250000)

    assert result["status"] == "sent"
    payload = post.call_args.kwargs["json"]
    assert payload["personalizations"][0]["to"] == [{"email": "asha@example.com"}]
    assert "₹2,500.00" in payload["content"][0]["value"]
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer SG.test"


def test_email_api_errors_are_retried_then_raised(monkeypatch, mocker):
    monkeypatch.setattr(settings, "SENDGRID_API_KEY", "SG.test")
    mocker.patch("tenacity.nap.time.sleep")
    post = mocker.patch.object(
        notification_service.requests, "post", side_effect=requests.ConnectionError("down")
    )

    with pytest.raises(requests.ConnectionError):
        send_order_confirmation_task("asha@example.com", "order-1", 1000)

    assert post.call_count == 3


def test_service_queues_the_task(mocker):
    task = mocker.patch.object(notification_service, "send_order_confirmation_task")

    NotificationService.send_order_confirmation("asha@example.com", "order-1", 1000)

    task.delay.assert_called_once_with("asha@example.com", "order-1", 1000)
