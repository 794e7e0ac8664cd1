"""
Production entry and detail endpoints.
"""

from tests.conftest import entry_payload


def create_entry(client, **overrides):
    response = client.post("/api/production", json=entry_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def add_detail(client, entry_id, model="NTSU", quantity=12.5):
    return client.post(f"/api/production/{entry_id}/details", json={"model": model, "quantity": quantity})


def test_create_entry(client, clock):
    entry = create_entry(client)
    assert entry["id"] == 1
    assert entry["userId"] == 1
    assert entry["operatorId"] == "12275"
    assert (entry["process"], entry["station"], entry["time"]) == ("Buffing", "2", "8am")
    assert entry["createdAt"].startswith("2024-05-01T08:00:00")


def test_entry_readable_with_empty_details(client):
    entry = create_entry(client)
    response = client.get(f"/api/production/{entry['id']}")
    assert response.status_code == 200
    assert response.json()["details"] == []


def test_missing_entry_is_404(client):
    response = client.get("/api/production/5")
    assert response.status_code == 404
    assert response.json()["message"] == "Production entry not found"


def test_drilling_uses_lettered_stations(client):
    create_entry(client, process="Mul.Drilling", station="G")
    response = client.post("/api/production", json=entry_payload(process="Mul.Drilling", station="3"))
    assert response.status_code == 400


def test_regular_process_rejects_lettered_station(client):
    response = client.post("/api/production", json=entry_payload(process="Painting", station="F"))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


def test_entry_rejects_unknown_values(client):
    assert client.post("/api/production", json=entry_payload(process="Sanding")).status_code == 400
    assert client.post("/api/production", json=entry_payload(time="noon")).status_code == 400


def test_entry_missing_field_reports_field(client):
    payload = entry_payload()
    del payload["operatorId"]
    response = client.post("/api/production", json=payload)
    assert response.status_code == 400
    assert {"field": "operatorId"}.items() <= response.json()["errors"][0].items()


def test_add_details(client):
    entry = create_entry(client)
    first = add_detail(client, entry["id"], "NTSU", 12.5)
    second = add_detail(client, entry["id"], "NTRB", 3)
    assert first.status_code == 201
    assert first.json() == {"id": 1, "entryId": entry["id"], "model": "NTSU", "quantity": 12.5}
    assert second.json()["id"] == 2

    details = client.get(f"/api/production/{entry['id']}").json()["details"]
    assert [d["model"] for d in details] == ["NTSU", "NTRB"]
    assert all(d["entryId"] == entry["id"] for d in details)


def test_detail_for_missing_entry_is_404(client):
    response = add_detail(client, 999)
    assert response.status_code == 404
    assert response.json()["message"] == "Production entry not found"


def test_missing_entry_checked_before_detail_body(client):
    response = client.post("/api/production/999/details", json={"model": "???", "quantity": -1})
    assert response.status_code == 404


def test_missing_entry_checked_before_body_shape(client):
    assert client.post("/api/production/999/details", json=[1, 2]).status_code == 404
    assert client.post("/api/production/999/details").status_code == 404


def test_detail_body_must_be_an_object(client):
    entry = create_entry(client)
    response = client.post(f"/api/production/{entry['id']}/details", json=[1, 2])
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid production detail data"
    assert client.post(f"/api/production/{entry['id']}/details").status_code == 400


def test_detail_validation(client):
    entry = create_entry(client)
    response = add_detail(client, entry["id"], quantity=0)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid production detail data"
    assert response.json()["errors"][0]["field"] == "quantity"

    assert add_detail(client, entry["id"], quantity=0.05).status_code == 400
    assert add_detail(client, entry["id"], quantity=0.1).status_code == 201
    assert add_detail(client, entry["id"], model="XXXX").status_code == 400


def test_operator_scenario(seeded_client):
    entry = create_entry(seeded_client, userId=1, process="Buffing", station="2", time="8am")
    assert add_detail(seeded_client, entry["id"], "NTSU", 12.5).status_code == 201

    entries = seeded_client.get("/api/production", params={"userId": 1}).json()
    assert len(entries) == 1
    assert len(entries[0]["details"]) == 1
    assert entries[0]["details"][0]["quantity"] == 12.5


def test_list_filters(client):
    create_entry(client, process="Painting", station="3")
    create_entry(client, process="Painting", station="4")
    create_entry(client, process="QAQC", station="3", userId=2)

    everything = client.get("/api/production").json()
    assert [e["id"] for e in everything] == [1, 2, 3]

    painting = client.get("/api/production", params={"process": "Painting"}).json()
    assert [e["id"] for e in painting] == [1, 2]

    narrowed = client.get("/api/production", params={"process": "Painting", "station": "3"}).json()
    assert [e["id"] for e in narrowed] == [1]

    by_user = client.get("/api/production", params={"userId": 2}).json()
    assert [e["id"] for e in by_user] == [3]


def test_empty_query_values_are_ignored(client):
    create_entry(client)
    assert len(client.get("/api/production", params={"process": "", "station": ""}).json()) == 1


def test_bad_query_is_400(client):
    assert client.get("/api/production", params={"userId": "abc"}).status_code == 400
    assert client.get("/api/production", params={"startDate": "yesterday"}).status_code == 400


def test_created_at_round_trips_through_date_filter(client, clock):
    entry = create_entry(client)
    clock.advance(hours=3)
    create_entry(client)

    stamp = entry["createdAt"]
    result = client.get("/api/production", params={"startDate": stamp, "endDate": stamp}).json()
    assert [e["id"] for e in result] == [entry["id"]]


def test_date_window(client, clock):
    create_entry(client)
    clock.advance(days=2)
    create_entry(client)

    result = client.get("/api/production", params={"startDate": "2024-05-02T00:00:00Z"}).json()
    assert [e["id"] for e in result] == [2]
    result = client.get("/api/production", params={"endDate": "2024-05-02T00:00:00+00:00"}).json()
    assert [e["id"] for e in result] == [1]


def test_summary(client):
    a = create_entry(client, process="Painting", station="3", time="5pm")
    b = create_entry(client, process="Buffing", station="1", time="8am")
    add_detail(client, a["id"], "NTSU", 10)
    add_detail(client, a["id"], "NTRB", 2.5)
    add_detail(client, b["id"], "NTSU", 4)

    summary = client.get("/api/production/summary").json()
    assert summary["totalQuantity"] == 16.5
    assert summary["entryCount"] == 2
    assert summary["detailCount"] == 3
    assert summary["byTime"] == [{"time": "8am", "quantity": 4}, {"time": "5pm", "quantity": 12.5}]
    assert summary["byModel"][0] == {"model": "NTSU", "quantity": 14}

    painting = client.get("/api/production/summary", params={"process": "Painting"}).json()
    assert painting["totalQuantity"] == 12.5
    assert painting["byProcess"] == [{"process": "Painting", "quantity": 12.5}]


def test_infinite_quantity_rejected(client):
    entry = create_entry(client)
    response = client.post(
        f"/api/production/{entry['id']}/details",
        content='{"model": "NTSU", "quantity": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "quantity"

    assert client.get(f"/api/production/{entry['id']}").json()["details"] == []
    assert client.get("/api/production/summary").json()["totalQuantity"] == 0
