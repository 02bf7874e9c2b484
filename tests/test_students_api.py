import pandas as pd


def test_list_students(client):
    response = client.get("/api/v1/students")
    assert response.status_code == 200
    body = response.json()
    assert [s["id"] for s in body["students"]] == [1, 2, 3]
    assert body["students"][0]["class_name"] == "X-IPA-1"


def test_list_students_filters(client):
    assert len(client.get("/api/v1/students", params={"class_name": "XI-IPS-1"}).json()["students"]) == 1
    assert len(client.get("/api/v1/students", params={"class_name": "all"}).json()["students"]) == 3
    found = client.get("/api/v1/students", params={"search": "rina"}).json()["students"]
    assert [s["id"] for s in found] == [2]
    by_nis = client.get("/api/v1/students", params={"search": "10003"}).json()["students"]
    assert [s["id"] for s in by_nis] == [3]
    transfer = client.get("/api/v1/students", params={"type": "transfer"}).json()["students"]
    assert [s["id"] for s in transfer] == [3]
    naik = client.get("/api/v1/students", params={"promotion_status": "naik"}).json()["students"]
    assert [s["id"] for s in naik] == [3]


def test_list_students_invalid_enum_filter(client):
    assert client.get("/api/v1/students", params={"type": "alien"}).status_code == 422
    assert client.get("/api/v1/students", params={"promotion_status": "x"}).status_code == 422


def test_create_student(client):
    response = client.post(
        "/api/v1/students",
        json={"nis": "2001", "name": "Budi Santoso", "class_name": "X-IPA-2"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 4
    assert body["status"] == "belum-diisi"
    assert body["time"] == "-"
    assert body["type"] == "new"
    assert body["photo"] == "BS"


def test_create_student_validation(client):
    assert client.post("/api/v1/students", json={"nis": "1", "name": "A"}).status_code == 422
    response = client.post(
        "/api/v1/students",
        json={"nis": "1", "name": "A", "class_name": "X", "type": "alumni"},
    )
    assert response.status_code == 422


def test_get_student_with_details(client):
    client.patch("/api/v1/students/1", json={"violations": 1, "achievements": 2})
    body = client.get("/api/v1/students/1").json()
    assert len(body["recent_violations"]) == 1
    assert len(body["recent_achievements"]) == 2


def test_get_student_not_found_and_bad_id(client):
    assert client.get("/api/v1/students/999").status_code == 404
    assert client.get("/api/v1/students/0").status_code == 422
    assert client.get("/api/v1/students/abc").status_code == 422


def test_student_details_list(client):
    body = client.get("/api/v1/students/details").json()
    assert len(body["students"]) == 3
    assert body["students"][0]["recent_violations"] == []


def test_patch_student(client):
    response = client.patch("/api/v1/students/2", json={"class_name": "XI-IPA-1"})
    assert response.status_code == 200
    assert response.json()["class_name"] == "XI-IPA-1"
    assert client.patch("/api/v1/students/99", json={"name": "X"}).status_code == 404


def test_create_student_rejects_taken_nis(client):
    response = client.post(
        "/api/v1/students",
        json={"nis": "10001", "name": "Budi Santoso", "class_name": "X-IPA-2"},
    )
    assert response.status_code == 409
    assert "10001" in response.json()["detail"]
    assert len(client.get("/api/v1/students").json()["students"]) == 3


def test_patch_student_rejects_taken_nis(client):
    assert client.patch("/api/v1/students/2", json={"nis": "10001"}).status_code == 409
    assert client.get("/api/v1/students/2").json()["nis"] == "10002"
    # NIS milik sendiri boleh dikirim ulang
    assert client.patch("/api/v1/students/2", json={"nis": "10002"}).status_code == 200


def test_delete_student(client):
    assert client.delete("/api/v1/students/2").status_code == 200
    assert client.get("/api/v1/students/2").status_code == 404
    assert client.delete("/api/v1/students/2").status_code == 404


def test_update_class(client):
    response = client.put("/api/v1/students/class", json={"student_id": 1, "class_name": "XI-IPA-2"})
    assert response.status_code == 200
    assert client.get("/api/v1/students/1").json()["class_name"] == "XI-IPA-2"


def test_update_class_unknown_student(client):
    response = client.put("/api/v1/students/class", json={"student_id": 99999, "class_name": "X-IPA-1"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Siswa tidak ditemukan"


def test_update_promotion(client):
    response = client.put(
        "/api/v1/students/promotion",
        json={"student_id": 1, "promotion_status": "lulus"},
    )
    assert response.status_code == 200
    student = client.get("/api/v1/students/1").json()
    assert student["promotion_status"] == "lulus"
    assert student["graduation_status"] == "lulus"
    assert student["previous_class"] == "X-IPA-1"
    assert student["next_class"] == "X-IPA-1"


def test_update_promotion_rejects_unknown_status(client):
    response = client.put(
        "/api/v1/students/promotion",
        json={"student_id": 1, "promotion_status": "pindah"},
    )
    assert response.status_code == 422


def test_import_endpoint(client):
    content = pd.DataFrame([
        {"NIS": "5001", "Nama": "Gilang Ramadhan", "Kelas": "X-IPA-1"},
        {"NIS": "5002", "Nama": "Maya Sari", "Kelas": "X-IPA-2"},
    ]).to_csv(index=False).encode("utf-8")

    response = client.post(
        "/api/v1/students/import",
        files={"file": ("siswa.csv", content, "text/csv")},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["created"] == 2
    assert body["file_name"] == "siswa.csv"
    assert len(client.get("/api/v1/students").json()["students"]) == 5


def test_import_endpoint_bad_file(client):
    response = client.post(
        "/api/v1/students/import",
        files={"file": ("siswa.pdf", b"%PDF", "application/pdf")},
    )
    assert response.status_code == 400
