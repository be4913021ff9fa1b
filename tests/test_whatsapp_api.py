"""
Tests for the outbound WhatsApp relay endpoints.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from washield.core.config import Settings
from washield.main import create_app


def test_send_text_message(client, provider):
    r = client.post("/api/whatsapp/send", json={"phoneNumber": "15550001111", "message": "hello"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["messages"][0]["id"].startswith("wamid.mock_")
    assert provider.sent[-1]["text"] == {"body": "hello"}


def test_send_image_message_uses_link(client, provider):
    r = client.post(
        "/api/whatsapp/send",
        json={"phoneNumber": "15550001111", "message": "https://cdn.example.test/a.png", "messageType": "image"},
    )

    assert r.status_code == 200
    sent = provider.sent[-1]
    assert sent["image"] == {"link": "https://cdn.example.test/a.png"}
    assert "text" not in sent


def test_send_requires_phone_and_message(client, provider):
    r = client.post("/api/whatsapp/send", json={"phoneNumber": "15550001111"})

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Missing phoneNumber or message"}
    assert provider.sent == []


def test_send_rejects_unsupported_type(client):
    r = client.post("/api/whatsapp/send", json={"phoneNumber": "1", "message": "x", "messageType": "sticker"})

    assert r.status_code == 400
    assert r.json()["error"] == "Unsupported messageType: sticker"


def test_message_status(client):
    r = client.get("/api/whatsapp/message-status/wamid.1")

    assert r.status_code == 200
    assert r.json()["data"]["id"] == "wamid.1"


def test_mark_as_read_requires_message_id(client):
    r = client.post("/api/whatsapp/mark-as-read", json={})

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Missing messageId"}


def test_mark_as_read(client):
    r = client.post("/api/whatsapp/mark-as-read", json={"messageId": "wamid.1"})

    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {"success": True}}


def test_phone_info(client):
    r = client.get("/api/whatsapp/phone-info")

    assert r.status_code == 200
    assert r.json()["data"]["id"] == "mock_phone_number_id"


def test_provider_failures_become_500_with_message(failing_client):
    calls = [
        failing_client.post("/api/whatsapp/send", json={"phoneNumber": "1", "message": "x"}),
        failing_client.get("/api/whatsapp/message-status/wamid.1"),
        failing_client.post("/api/whatsapp/mark-as-read", json={"messageId": "wamid.1"}),
        failing_client.get("/api/whatsapp/phone-info"),
    ]
    for r in calls:
        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "Invalid OAuth access token"}


def test_missing_credentials_outside_dev_is_500():
    prod = Settings(
        _env_file=None,
        WHATSAPP_API_URL=None,
        PHONE_NUMBER_ID=None,
        WHATSAPP_ACCESS_TOKEN=None,
        ENV="production",
    )
    client = TestClient(create_app(app_settings=prod), raise_server_exceptions=False)

    r = client.get("/api/whatsapp/phone-info")
    assert r.status_code == 500
    assert r.json()["success"] is False
    assert "WHATSAPP_API_URL" in r.json()["error"]


def test_missing_credentials_in_dev_uses_mock(test_settings):
    client = TestClient(create_app(app_settings=test_settings))

    r = client.get("/api/whatsapp/phone-info")
    assert r.status_code == 200
    assert r.json()["data"]["verified_name"] == "WA-Shield (mock)"


def test_partial_credentials_in_dev_do_not_fall_back_to_mock():
    partial = Settings(
        _env_file=None,
        WHATSAPP_API_URL=None,
        PHONE_NUMBER_ID="123",
        WHATSAPP_ACCESS_TOKEN="real-token",
        ENV="dev",
    )
    client = TestClient(create_app(app_settings=partial), raise_server_exceptions=False)

    r = client.post("/api/whatsapp/send", json={"phoneNumber": "15550001111", "message": "hello"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Missing WHATSAPP_API_URL environment variables"}


def test_send_accepts_numeric_phone_number(client, provider):
    r = client.post("/api/whatsapp/send", json={"phoneNumber": 15550001111, "message": "hi"})

    assert r.status_code == 200
    assert provider.sent[-1]["to"] == "15550001111"
