import smtplib
from datetime import datetime, timezone

from fastapi.testclient import TestClient

import portfolio_api.utils.email as email_utils
from portfolio_api.core.config import settings
from portfolio_api.models.message import Message

MESSAGES_URL = "/api/v1/messages"


def _message_payload(**overrides) -> dict:
    payload = {
        "name": "Dana",
        "email": "dana@example.com",
        "subject": "Hello",
        "message": "Loved the case study.",
    }
    payload.update(overrides)
    return payload


def test_contact_message_is_stored(client: TestClient, db_session):
    response = client.post(MESSAGES_URL, json=_message_payload())
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "dana@example.com"
    assert "createdAt" in body["data"]
    assert db_session.query(Message).count() == 1


def test_created_at_is_current_utc_time(client: TestClient):
    response = client.post(MESSAGES_URL, json=_message_payload())
    created_at = datetime.fromisoformat(response.json()["data"]["createdAt"].rstrip("Z"))
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    assert abs((now - created_at).total_seconds()) < 60


def test_markup_is_stripped(client: TestClient):
    response = client.post(
        MESSAGES_URL,
        json=_message_payload(message="<script>alert(1)</script><b>Hi</b> there"),
    )
    assert response.status_code == 201
    assert "<" not in response.json()["data"]["message"]
    assert "Hi there" in response.json()["data"]["message"]


def test_invalid_email_is_rejected(client: TestClient):
    response = client.post(MESSAGES_URL, json=_message_payload(email="not-an-email"))
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "email"


def test_markup_only_name_is_rejected(client: TestClient, db_session):
    response = client.post(MESSAGES_URL, json=_message_payload(name="<b></b>"))
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "name"
    assert db_session.query(Message).count() == 0


def test_honeypot_submission_is_not_stored(client: TestClient, db_session):
    response = client.post(MESSAGES_URL, json=_message_payload(website="http://spam.example"))
    assert response.status_code == 201
    assert response.json()["success"] is True
    assert db_session.query(Message).count() == 0


def test_contact_form_is_rate_limited(client: TestClient):
    for _ in range(5):
        assert client.post(MESSAGES_URL, json=_message_payload()).status_code == 201

    response = client.post(MESSAGES_URL, json=_message_payload())
    assert response.status_code == 429
    assert response.json()["message"] == "Too many messages sent from this IP, please try again after 15 minutes"
    assert response.json()["code"] == "rate_limited"
    assert "Retry-After" in response.headers


def test_new_message_notifies_admin(client: TestClient, monkeypatch):
    sent = []
    monkeypatch.setattr(
        email_utils,
        "send_email_async",
        lambda to_email, subject, body, html=None: sent.append((to_email, subject, html)),
    )
    old_admin_email = settings.ADMIN_EMAIL
    old_from_email = settings.EMAILS_FROM_EMAIL
    settings.ADMIN_EMAIL = "owner@example.com"
    settings.EMAILS_FROM_EMAIL = "noreply@example.com"
    try:
        response = client.post(MESSAGES_URL, json=_message_payload(subject="Project <idea>"))
    finally:
        settings.ADMIN_EMAIL = old_admin_email
        settings.EMAILS_FROM_EMAIL = old_from_email

    assert response.status_code == 201
    assert len(sent) == 1
    to_email, subject, html = sent[0]
    assert to_email == "owner@example.com"
    assert subject.startswith("Portfolio Message:")
    assert "Dana" in html


def test_notification_skipped_without_email_settings(client: TestClient, monkeypatch):
    sent = []
    monkeypatch.setattr(email_utils, "send_email_async", lambda *args, **kwargs: sent.append(args))

    response = client.post(MESSAGES_URL, json=_message_payload())
    assert response.status_code == 201
    assert sent == []


def test_inbox_is_admin_only(client: TestClient, auth_headers: dict):
    client.post(MESSAGES_URL, json=_message_payload(name="First"))
    client.post(MESSAGES_URL, json=_message_payload(name="Second"))

    assert client.get(MESSAGES_URL).status_code == 401

    response = client.get(MESSAGES_URL, headers=auth_headers)
    assert response.status_code == 200
    assert {item["name"] for item in response.json()} == {"First", "Second"}


def test_bulk_delete_messages(client: TestClient, auth_headers: dict, db_session):
    ids = [
        client.post(MESSAGES_URL, json=_message_payload(name=name)).json()["data"]["id"]
        for name in ("A", "B", "C")
    ]

    response = client.post(
        f"{MESSAGES_URL}/bulk-delete",
        json={"ids": ids[:2] + [9999]},
        headers=auth_headers,
    )
    assert response.status_code == 204
    assert [row.id for row in db_session.query(Message).all()] == [ids[2]]


def test_get_and_delete_single_message(client: TestClient, auth_headers: dict):
    message_id = client.post(MESSAGES_URL, json=_message_payload()).json()["data"]["id"]

    fetched = client.get(f"{MESSAGES_URL}/{message_id}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["subject"] == "Hello"

    assert client.delete(f"{MESSAGES_URL}/{message_id}", headers=auth_headers).status_code == 204
    assert client.get(f"{MESSAGES_URL}/{message_id}", headers=auth_headers).status_code == 404


def _create_message(client: TestClient) -> int:
    return client.post(MESSAGES_URL, json=_message_payload()).json()["data"]["id"]


def _reply_payload(**overrides) -> dict:
    payload = {
        "subject": "Re: Hello",
        "body": "<p>Thanks <strong>Dana</strong></p><script>alert(1)</script>",
    }
    payload.update(overrides)
    return payload


def test_reply_is_sent_to_sender_with_sanitized_html(client: TestClient, auth_headers: dict, monkeypatch):
    message_id = _create_message(client)
    sent = []
    monkeypatch.setattr(email_utils, "_send_email_smtp", sent.append)
    old_from_email = settings.EMAILS_FROM_EMAIL
    settings.EMAILS_FROM_EMAIL = "noreply@example.com"
    try:
        response = client.post(
            f"{MESSAGES_URL}/{message_id}/reply",
            json=_reply_payload(),
            headers=auth_headers,
        )
    finally:
        settings.EMAILS_FROM_EMAIL = old_from_email

    assert response.status_code == 200
    assert response.json()["message"] == "Reply sent successfully"
    assert len(sent) == 1

    msg = sent[0]
    assert msg["To"] == "dana@example.com"
    assert msg["Subject"] == "Re: Hello"
    html_part = msg.get_payload()[-1].get_payload(decode=True).decode()
    assert "<strong>Dana</strong>" in html_part
    assert "<script>" not in html_part


def test_reply_smtp_failure_is_upstream_failure(client: TestClient, auth_headers: dict, monkeypatch):
    message_id = _create_message(client)

    def refuse(msg):
        raise smtplib.SMTPException("relay denied")

    monkeypatch.setattr(email_utils, "_send_email_smtp", refuse)
    old_from_email = settings.EMAILS_FROM_EMAIL
    settings.EMAILS_FROM_EMAIL = "noreply@example.com"
    try:
        response = client.post(
            f"{MESSAGES_URL}/{message_id}/reply",
            json=_reply_payload(),
            headers=auth_headers,
        )
    finally:
        settings.EMAILS_FROM_EMAIL = old_from_email

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "upstream_failure"
    assert "relay denied" in body["message"]


def test_reply_without_mail_settings_is_upstream_failure(client: TestClient, auth_headers: dict):
    message_id = _create_message(client)
    response = client.post(
        f"{MESSAGES_URL}/{message_id}/reply",
        json=_reply_payload(),
        headers=auth_headers,
    )
    assert response.status_code == 502
    assert response.json()["message"] == "Email service not configured"


def test_reply_validation_and_access(client: TestClient, auth_headers: dict):
    message_id = _create_message(client)
    url = f"{MESSAGES_URL}/{message_id}/reply"

    assert client.post(url, json=_reply_payload()).status_code == 401

    response = client.post(url, json=_reply_payload(body="<p></p><br>"), headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "body"

    missing = client.post(f"{MESSAGES_URL}/9999/reply", json=_reply_payload(), headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Message not found"
