"""
Login, user lookup, registration and reference data endpoints.
"""


def test_login_returns_user_without_password(seeded_client):
    response = seeded_client.post("/api/auth/login", json={"username": "operator", "password": "password"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 1
    assert body["username"] == "operator"
    assert body["role"] == "operator"
    assert body["operatorId"] == "12275"
    assert "password" not in body
    assert "hashedPassword" not in body


def test_login_manager(seeded_client):
    response = seeded_client.post("/api/auth/login", json={"username": "manager", "password": "password"})
    assert response.status_code == 200
    assert response.json()["role"] == "management"
    assert response.json()["operatorId"] is None


def test_login_bad_password(seeded_client):
    response = seeded_client.post("/api/auth/login", json={"username": "operator", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_user(seeded_client):
    response = seeded_client.post("/api/auth/login", json={"username": "ghost", "password": "password"})
    assert response.status_code == 401


def test_login_missing_fields(seeded_client):
    response = seeded_client.post("/api/auth/login", json={"username": "operator"})
    assert response.status_code == 400
    assert any(err["field"] == "password" for err in response.json()["errors"])

    response = seeded_client.post("/api/auth/login", json={"username": "", "password": ""})
    assert response.status_code == 400


def test_get_user(seeded_client):
    response = seeded_client.get("/api/users/2")
    assert response.status_code == 200
    assert response.json()["username"] == "manager"
    assert "hashedPassword" not in response.json()


def test_get_missing_user(seeded_client):
    response = seeded_client.get("/api/users/99")
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_register_and_login(client):
    response = client.post("/api/users", json={
        "username": "welder",
        "password": "s3cret",
        "name": "Wanda Welder",
        "role": "operator",
        "operatorId": "30001",
    })
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1
    assert created["operatorId"] == "30001"
    assert "password" not in created

    login = client.post("/api/auth/login", json={"username": "welder", "password": "s3cret"})
    assert login.status_code == 200
    assert login.json()["id"] == created["id"]


def test_register_rejects_taken_username(seeded_client):
    response = seeded_client.post("/api/users", json={
        "username": "operator", "password": "x", "name": "Other", "role": "operator",
    })
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "username"


def test_register_rejects_unknown_role(client):
    response = client.post("/api/users", json={
        "username": "boss", "password": "x", "name": "Boss", "role": "admin",
    })
    assert response.status_code == 400


def test_reference_data(client):
    response = client.get("/api/reference-data")
    assert response.status_code == 200
    body = response.json()
    assert len(body["processes"]) == 9
    assert "Mul.Drilling" in body["processes"]
    assert len(body["models"]) == 10
    assert body["times"] == ["9.45am", "11.30am", "2.45pm", "5pm", "8pm", "8am"]
    assert body["stationsByProcess"]["Mul.Drilling"] == ["F", "G", "H"]
    assert body["stationsByProcess"]["default"] == ["1", "2", "3", "4", "5", "6", "7"]
    assert "Custom message" in body["instructionTypes"]


def test_health(client):
    response = client.get("/api/health")
    assert response.json() == {"status": "ok", "storage": "memory"}
