def test_default_settings(client):
    body = client.get("/api/v1/settings").json()
    assert body == {
        "school_name": "Educore",
        "academic_year": "2025/2026",
        "semester": "Ganjil",
        "start_time": "07:00",
        "end_time": "15:00",
        "notifications": True,
        "language": "id",
        "theme": "light",
    }


def test_partial_update_merges(client):
    response = client.put("/api/v1/settings", json={"semester": "Genap", "theme": "dark"})
    assert response.status_code == 200
    assert response.json()["success"] is True

    body = client.get("/api/v1/settings").json()
    assert body["semester"] == "Genap"
    assert body["theme"] == "dark"
    assert body["school_name"] == "Educore"


def test_update_rejects_wrong_types(client):
    assert client.put("/api/v1/settings", json={"notifications": "kadang"}).status_code == 422


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
