CONSULTATION = {
    "full_name": "Rahul Sharma",
    "email": "Rahul@Example.com",
    "mobile": "98765 43210",
    "state_slug": "delhi",
}


def submit(client, **overrides):
    payload = {**CONSULTATION, **overrides}
    return client.post("/api/v1/consultations/public", json=payload)


def test_submit_consultation_creates_pending_record(client):
    response = submit(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Consultation submitted successfully"
    data = body["data"]
    assert data["id"] > 0
    assert data["status"] == "pending"
    assert data["email"] == "rahul@example.com"
    assert data["mobile"] == "9876543210"
    assert data["source"] == "hero_section"
    assert data["created_at"].endswith("+05:30")


def test_submit_consultation_only_requires_name_email_mobile(client):
    response = client.post(
        "/api/v1/consultations/public",
        json={"full_name": "Rahul Sharma", "email": "rahul@example.com", "mobile": "9876543210"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["address"] is None
    assert data["pincode"] is None
    assert data["state_slug"] is None


def test_submit_consultation_reports_every_invalid_field(client, admin_headers):
    response = submit(client, full_name="R", email="rahul@", mobile="12345", pincode="0123")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    errors = {err["field"]: err for err in body["errors"]}
    assert set(errors) == {"full_name", "email", "mobile", "pincode"}
    assert errors["mobile"]["message"] == "Please provide a valid 10-digit mobile number"
    assert errors["mobile"]["value"] == "12345"

    listing = client.get("/api/v1/consultations", headers=admin_headers)
    assert listing.json()["data"]["pagination"]["total"] == 0


def test_identical_submissions_are_stored_separately(client):
    first = submit(client).json()["data"]["id"]
    second = submit(client).json()["data"]["id"]

    assert first != second


def test_list_consultations_requires_admin(client, user_headers):
    assert client.get("/api/v1/consultations").status_code == 401
    response = client.get("/api/v1/consultations", headers=user_headers)
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Admin access required"}


def test_list_consultations_filters_and_paginates(client, admin_headers):
    for _ in range(3):
        submit(client, state_slug="delhi")
    submit(client, state_slug="maharashtra")

    response = client.get(
        "/api/v1/consultations",
        params={"state_slug": "delhi", "page": 1, "limit": 2},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 2
    assert all(item["state_slug"] == "delhi" for item in data["items"])
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}
    # Newest first
    assert data["items"][0]["id"] > data["items"][1]["id"]


def test_list_consultations_rejects_out_of_range_limit(client, admin_headers):
    response = client.get("/api/v1/consultations", params={"limit": 101}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_admin_updates_consultation_status(client, admin_headers):
    consultation_id = submit(client).json()["data"]["id"]

    response = client.patch(
        f"/api/v1/consultations/{consultation_id}/status",
        json={"status": "Scheduled", "notes": "Call booked for Monday"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "scheduled"
    assert data["notes"] == "Call booked for Monday"

    filtered = client.get("/api/v1/consultations", params={"status": "scheduled"}, headers=admin_headers)
    assert [item["id"] for item in filtered.json()["data"]["items"]] == [consultation_id]


def test_invalid_consultation_status_leaves_record_unchanged(client, admin_headers):
    consultation_id = submit(client).json()["data"]["id"]

    response = client.put(
        f"/api/v1/consultations/{consultation_id}/status",
        json={"status": "archived"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid status"
    assert body["errors"][0]["field"] == "status"

    current = client.get(f"/api/v1/consultations/{consultation_id}", headers=admin_headers)
    assert current.json()["data"]["status"] == "pending"


def test_status_update_on_missing_consultation_is_404(client, admin_headers):
    response = client.put(
        "/api/v1/consultations/999/status",
        json={"status": "contacted"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Consultation not found"}


def test_admin_deletes_consultation(client, admin_headers):
    consultation_id = submit(client).json()["data"]["id"]

    response = client.delete(f"/api/v1/consultations/{consultation_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get(f"/api/v1/consultations/{consultation_id}", headers=admin_headers).status_code == 404
