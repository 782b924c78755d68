from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from portfolio_api.services.analytics_service import AnalyticsService


def test_track_event_is_public(client: TestClient):
    response = client.post(
        "/api/v1/analytics/track",
        json={"type": "page_view", "path": "/projects", "device": "mobile"},
    )
    assert response.status_code == 201
    assert response.json()["type"] == "page_view"
    assert response.json()["device"] == "mobile"


def test_track_event_requires_type(client: TestClient):
    response = client.post("/api/v1/analytics/track", json={"path": "/"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "type"


def test_failed_write_does_not_fail_the_page(client: TestClient, monkeypatch):
    def broken_log_event(db, data):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(AnalyticsService, "log_event", staticmethod(broken_log_event))

    response = client.post("/api/v1/analytics/track", json={"type": "page_view"})
    assert response.status_code == 202
    assert response.json() == {"success": False, "message": "Event not recorded"}


def test_summary_counts_page_views(client: TestClient, auth_headers: dict):
    for event_type in ("page_view", "page_view", "project_click"):
        client.post("/api/v1/analytics/track", json={"type": event_type, "targetId": 1})

    assert client.get("/api/v1/analytics/summary").status_code == 401

    response = client.get("/api/v1/analytics/summary", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"totalViews": 2, "events": 3}
