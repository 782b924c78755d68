from fastapi.testclient import TestClient

PROJECTS_URL = "/api/v1/projects"


def _project_payload(**overrides) -> dict:
    payload = {
        "title": "Realtime Dashboard",
        "description": "Streaming metrics dashboard",
        "category": "Web",
        "techStack": ["FastAPI", "React"],
        "githubUrl": "https://github.com/example/dashboard",
        "isFlagship": True,
        "problemStatement": "Ops had no live view of the fleet",
    }
    payload.update(overrides)
    return payload


def _create_project(client: TestClient, auth_headers: dict, **overrides) -> dict:
    response = client.post(PROJECTS_URL, json=_project_payload(**overrides), headers=auth_headers)
    assert response.status_code == 201
    return response.json()["data"]


def test_create_project_returns_camel_case_resource(client: TestClient, auth_headers: dict):
    response = client.post(PROJECTS_URL, json=_project_payload(), headers=auth_headers)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Project created successfully"
    project = body["data"]
    assert project["id"] > 0
    assert project["techStack"] == ["FastAPI", "React"]
    assert project["isFlagship"] is True
    assert project["problemStatement"] == "Ops had no live view of the fleet"
    assert project["status"] == "Completed"


def test_projects_are_public_to_read(client: TestClient, auth_headers: dict):
    created = _create_project(client, auth_headers)

    listed = client.get(PROJECTS_URL)
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()] == [created["id"]]

    fetched = client.get(f"{PROJECTS_URL}/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["githubUrl"] == "https://github.com/example/dashboard"


def test_writes_require_admin(client: TestClient):
    response = client.post(PROJECTS_URL, json=_project_payload())
    assert response.status_code == 401
    assert response.json()["code"] == "unauthorized"


def test_missing_project_returns_not_found_shape(client: TestClient):
    response = client.get(f"{PROJECTS_URL}/9999")
    assert response.status_code == 404

    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Project not found"
    assert body["code"] == "not_found"
    assert body["timestamp"].endswith("Z")


def test_invalid_body_lists_field_errors(client: TestClient, auth_headers: dict):
    response = client.post(PROJECTS_URL, json={"title": ""}, headers=auth_headers)
    assert response.status_code == 400

    body = response.json()
    assert body["code"] == "validation_error"
    assert body["message"] == "Validation failed"
    paths = {item["path"] for item in body["errors"]}
    assert {"title", "description", "category"} <= paths
    assert all(item["message"] for item in body["errors"])


def test_update_keeps_fields_not_sent(client: TestClient, auth_headers: dict):
    created = _create_project(client, auth_headers)

    response = client.put(
        f"{PROJECTS_URL}/{created['id']}",
        json={"title": "Fleet Dashboard", "description": None},
        headers=auth_headers,
    )
    assert response.status_code == 200

    project = response.json()["data"]
    assert project["title"] == "Fleet Dashboard"
    assert project["description"] == "Streaming metrics dashboard"
    assert project["techStack"] == ["FastAPI", "React"]


def test_reorder_sets_display_order(client: TestClient, auth_headers: dict):
    first = _create_project(client, auth_headers, title="First")
    second = _create_project(client, auth_headers, title="Second")

    response = client.post(
        f"{PROJECTS_URL}/reorder",
        json={"ids": [second["id"], first["id"]]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    titles = [item["title"] for item in client.get(PROJECTS_URL).json()]
    assert titles == ["Second", "First"]


def test_reorder_requires_ids(client: TestClient, auth_headers: dict):
    response = client.post(f"{PROJECTS_URL}/reorder", json={"ids": []}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "ids"


def test_delete_project(client: TestClient, auth_headers: dict):
    created = _create_project(client, auth_headers)

    response = client.delete(f"{PROJECTS_URL}/{created['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"{PROJECTS_URL}/{created['id']}").status_code == 404
