import uuid

from fastapi.testclient import TestClient

from sweem.main import app

client = TestClient(app)


def _create_client(name="Acme"):
    r = client.post("/clients", json={"name": name, "address": "1 Main St", "projectsTotal": 1, "projectsCompleted": 0})
    assert r.status_code == 201
    return r.json()


def _create_user(login="alice"):
    r = client.post("/users", json={"name": "Alice", "login": login, "password": "pw", "role": 1})
    assert r.status_code == 201
    return r.json()


def _create_project(client_id, manager_id):
    r = client.post("/projects", json={
        "clientId": client_id,
        "name": "Dashboard",
        "startDate": "2024-01-01",
        "plannedEndDate": "2024-02-01",
        "actualEndDate": None,
        "managerId": manager_id,
    })
    assert r.status_code == 201
    return r.json()


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "X-Request-ID" in r.headers


def test_client_crud_flow():
    r = client.post("/clients", json={"name": "Acme", "address": "1 Main St", "projectsTotal": 2, "projectsCompleted": 1})
    assert r.status_code == 201
    client_id = r.json()
    assert r.headers["Location"] == f"/clients/{client_id}"

    r = client.get(f"/clients/{client_id}")
    assert r.status_code == 200
    assert r.json() == {
        "id": client_id,
        "name": "Acme",
        "address": "1 Main St",
        "projectsTotal": 2,
        "projectsCompleted": 1,
    }

    r = client.put(f"/clients/{client_id}", json={"name": "Acme Ltd", "address": "2 Main St", "projectsTotal": 3, "projectsCompleted": 3})
    assert r.status_code == 200
    assert r.json()["name"] == "Acme Ltd"

    r = client.delete(f"/clients/{client_id}")
    assert r.status_code == 200
    assert r.json() == client_id
    assert client.get(f"/clients/{client_id}").status_code == 404
    assert client.delete(f"/clients/{client_id}").status_code == 404


def test_list_pagination_body():
    for i in range(12):
        _create_client(name=f"Client {i}")
    r = client.get("/clients", params={"page": 2, "pageSize": 5})
    assert r.status_code == 200
    body = r.json()
    assert len(body["items"]) == 5
    assert body["page"] == 2
    assert body["pageSize"] == 5
    assert body["totalCount"] == 12
    assert body["totalPages"] == 3
    assert body["hasPrevious"] is True
    assert body["hasNext"] is True


def test_list_clamps_query_params():
    _create_client()
    body = client.get("/clients", params={"page": 0, "pageSize": 1000}).json()
    assert body["page"] == 1
    assert body["pageSize"] == 100
    assert body["totalCount"] == 1


def test_validation_failures_are_400():
    assert client.post("/clients", json={"name": "", "address": "x"}).status_code == 400
    # unparsable body is reported as 400 as well
    assert client.post("/clients", json={"address": "x"}).status_code == 400
    r = client.post("/projects", json={
        "clientId": str(uuid.uuid4()),
        "name": "Orphan",
        "startDate": "2024-01-01",
        "plannedEndDate": "2024-02-01",
        "managerId": str(uuid.uuid4()),
    })
    assert r.status_code == 400
    assert "client not found" in r.json()["detail"]


def test_update_missing_is_404():
    r = client.put(f"/clients/{uuid.uuid4()}", json={"name": "X", "address": "Y"})
    assert r.status_code == 404
    assert client.get("/clients").json()["totalCount"] == 0


def test_user_body_never_contains_password():
    user_id = _create_user()
    body = client.get(f"/users/{user_id}").json()
    assert body == {"id": user_id, "name": "Alice", "login": "alice", "role": 1}
    listed = client.get("/users").json()["items"][0]
    assert "passwordHash" not in listed
    assert "password" not in listed


def test_duplicate_login_is_conflict():
    _create_user(login="dup")
    r = client.post("/users", json={"name": "Other", "login": "dup", "password": "pw", "role": 0})
    assert r.status_code == 409
    assert client.get("/users").json()["totalCount"] == 1


def test_delete_manager_is_conflict_and_client_delete_cascades():
    client_id = _create_client()
    manager_id = _create_user()
    project_id = _create_project(client_id, manager_id)

    r = client.delete(f"/users/{manager_id}")
    assert r.status_code == 409
    assert client.get(f"/users/{manager_id}").status_code == 200
    assert client.get(f"/projects/{project_id}").status_code == 200

    assert client.delete(f"/clients/{client_id}").status_code == 200
    assert client.get(f"/projects/{project_id}").status_code == 404
    assert client.delete(f"/users/{manager_id}").status_code == 200


def test_project_update_ignores_client_id():
    client_id = _create_client()
    manager_id = _create_user()
    project_id = _create_project(client_id, manager_id)
    r = client.put(f"/projects/{project_id}", json={
        "id": str(uuid.uuid4()),
        "clientId": str(uuid.uuid4()),
        "name": "Renamed",
        "plannedEndDate": "2024-03-01",
        "actualEndDate": "2024-02-15",
        "managerId": manager_id,
    })
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == project_id
    assert body["clientId"] == client_id
    assert body["startDate"] == "2024-01-01"
    assert body["actualEndDate"] == "2024-02-15"


def test_list_page_far_past_the_end_is_empty():
    _create_client()
    r = client.get("/clients", params={"page": 10**18, "pageSize": 100})
    assert r.status_code == 200
    body = r.json()
    assert body["items"] == []
    assert body["totalCount"] == 1
    assert body["totalPages"] == 1


def test_oversized_client_counters_are_400():
    r = client.post("/clients", json={"name": "Huge", "address": "x", "projectsTotal": 2**63, "projectsCompleted": 0})
    assert r.status_code == 400
    assert client.get("/clients").json()["totalCount"] == 0
