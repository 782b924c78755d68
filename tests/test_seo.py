from fastapi.testclient import TestClient

SEO_URL = "/api/v1/seo"


def _seo_payload(**overrides) -> dict:
    payload = {
        "pageSlug": "home",
        "metaTitle": "Portfolio",
        "metaDescription": "Projects and writing",
    }
    payload.update(overrides)
    return payload


def test_public_lookup_by_page_slug(client: TestClient, auth_headers: dict):
    created = client.post(SEO_URL, json=_seo_payload(), headers=auth_headers)
    assert created.status_code == 201
    assert created.json()["data"]["twitterCard"] == "summary_large_image"

    response = client.get(f"{SEO_URL}/home")
    assert response.status_code == 200
    assert response.json()["metaTitle"] == "Portfolio"
    assert response.json()["noindex"] is False


def test_unknown_page_slug(client: TestClient):
    response = client.get(f"{SEO_URL}/missing")
    assert response.status_code == 404
    assert response.json()["message"] == "SEO settings not found"


def test_duplicate_page_slug_conflicts(client: TestClient, auth_headers: dict):
    assert client.post(SEO_URL, json=_seo_payload(), headers=auth_headers).status_code == 201

    response = client.post(SEO_URL, json=_seo_payload(metaTitle="Other"), headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["message"] == "SEO settings for this slug already exist"


def test_patch_and_delete_settings(client: TestClient, auth_headers: dict):
    settings_id = client.post(SEO_URL, json=_seo_payload(), headers=auth_headers).json()["data"]["id"]

    patched = client.patch(f"{SEO_URL}/{settings_id}", json={"noindex": True}, headers=auth_headers)
    assert patched.status_code == 200
    assert patched.json()["data"]["noindex"] is True
    assert patched.json()["data"]["metaTitle"] == "Portfolio"

    assert client.get(SEO_URL).status_code == 401
    assert len(client.get(SEO_URL, headers=auth_headers).json()) == 1

    assert client.delete(f"{SEO_URL}/{settings_id}", headers=auth_headers).status_code == 204
    assert client.get(f"{SEO_URL}/home").status_code == 404
