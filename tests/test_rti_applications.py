import pytest


@pytest.fixture
def application_payload(reference_data):
    return {
        "service_id": reference_data["service_id"],
        "state_id": reference_data["state_id"],
        "full_name": "Asha Verma",
        "email": "asha@example.com",
        "mobile": "9876543210",
        "rti_query": "Please share the status of my ration card application.",
        "address": "12, Lajpat Nagar, New Delhi",
        "pincode": "110024",
    }


def create_owned(client, payload, headers):
    response = client.post("/api/v1/rti-applications", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


def test_public_submission_creates_unowned_pending_application(client, application_payload):
    payload = {key: application_payload[key] for key in ("service_id", "state_id", "full_name", "email", "mobile")}

    response = client.post("/api/v1/rti-applications/public", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "RTI application created successfully"
    assert body["data"]["status"] == "pending"
    assert body["data"]["user_id"] is None
    assert body["data"]["rti_query"] is None


def test_public_submission_missing_full_name_is_rejected(client, application_payload, admin_headers):
    payload = dict(application_payload)
    del payload["full_name"]

    response = client.post("/api/v1/rti-applications/public", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert {"field": "full_name", "message": "Full name is required", "value": None} in body["errors"]

    listing = client.get("/api/v1/rti-applications", headers=admin_headers)
    assert listing.json()["data"]["pagination"]["total"] == 0


def test_public_submission_with_unknown_service_is_rejected(client, application_payload):
    response = client.post("/api/v1/rti-applications/public", json={**application_payload, "service_id": 999})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Referenced record does not exist."}


def test_duplicate_submissions_get_distinct_ids(client, application_payload):
    first = client.post("/api/v1/rti-applications/public", json=application_payload).json()["data"]
    second = client.post("/api/v1/rti-applications/public", json=application_payload).json()["data"]

    assert first["id"] != second["id"]


def test_authenticated_submission_is_owned_by_caller(client, application_payload, user_headers, regular_user):
    data = create_owned(client, application_payload, user_headers)

    assert data["user_id"] == regular_user.id

    mine = client.get("/api/v1/rti-applications/my-applications", headers=user_headers)
    assert [item["id"] for item in mine.json()["data"]["items"]] == [data["id"]]


def test_authenticated_submission_requires_full_details(client, application_payload, user_headers):
    payload = {**application_payload, "address": "", "pincode": None}

    response = client.post("/api/v1/rti-applications", json=payload, headers=user_headers)

    assert response.status_code == 400
    fields = {err["field"] for err in response.json()["errors"]}
    assert fields == {"address", "pincode"}


def test_protected_routes_need_a_valid_token(client, application_payload, settings, regular_user, token_headers):
    assert client.post("/api/v1/rti-applications", json=application_payload).status_code == 401

    response = client.get("/api/v1/rti-applications", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid token"}

    expired = client.get("/api/v1/rti-applications", headers=token_headers(regular_user, expires_delta=-60))
    assert expired.status_code == 401
    assert expired.json()["message"] == "Token expired"


def test_token_for_deleted_user_is_rejected(client, db, regular_user, token_headers):
    headers = token_headers(regular_user)
    db.delete(regular_user)
    db.commit()

    response = client.get("/api/v1/auth/profile", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_owner_and_admin_can_read_others_cannot(
    client, application_payload, user_headers, other_headers, admin_headers
):
    application_id = create_owned(client, application_payload, user_headers)["id"]
    url = f"/api/v1/rti-applications/{application_id}"

    assert client.get(url, headers=user_headers).status_code == 200
    assert client.get(url, headers=admin_headers).status_code == 200

    response = client.get(url, headers=other_headers)
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Access denied"}


def test_public_application_is_admin_only(client, application_payload, user_headers, admin_headers):
    application_id = client.post("/api/v1/rti-applications/public", json=application_payload).json()["data"]["id"]
    url = f"/api/v1/rti-applications/{application_id}"

    assert client.get(url, headers=user_headers).status_code == 403
    assert client.get(url, headers=admin_headers).status_code == 200


def test_listing_is_scoped_to_owner_for_non_admins(
    client, application_payload, user_headers, other_headers, admin_headers
):
    create_owned(client, application_payload, user_headers)
    create_owned(client, application_payload, other_headers)
    client.post("/api/v1/rti-applications/public", json=application_payload)

    own = client.get("/api/v1/rti-applications", headers=user_headers).json()["data"]
    everything = client.get("/api/v1/rti-applications", headers=admin_headers).json()["data"]

    assert own["pagination"]["total"] == 1
    assert everything["pagination"]["total"] == 3


def test_owner_updates_applicant_details(client, application_payload, user_headers):
    application_id = create_owned(client, application_payload, user_headers)["id"]

    response = client.put(
        f"/api/v1/rti-applications/{application_id}",
        json={"mobile": "91234 56789", "pincode": "560034"},
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["mobile"] == "9123456789"
    assert data["pincode"] == "560034"
    assert data["full_name"] == "Asha Verma"
    assert data["status"] == "pending"


def test_update_rejects_invalid_fields(client, application_payload, user_headers):
    application_id = create_owned(client, application_payload, user_headers)["id"]

    response = client.put(
        f"/api/v1/rti-applications/{application_id}",
        json={"email": "asha@example"},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "email"


def test_only_admin_changes_status(client, application_payload, user_headers, admin_headers):
    application_id = create_owned(client, application_payload, user_headers)["id"]
    url = f"/api/v1/rti-applications/{application_id}/status"

    assert client.put(url, json={"status": "submitted"}, headers=user_headers).status_code == 403

    response = client.put(url, json={"status": "in_progress", "notes": "Filed with PIO"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "in_progress"
    assert response.json()["data"]["notes"] == "Filed with PIO"


def test_invalid_status_leaves_application_unchanged(client, application_payload, admin_headers):
    application_id = client.post("/api/v1/rti-applications/public", json=application_payload).json()["data"]["id"]

    response = client.patch(
        f"/api/v1/rti-applications/{application_id}/status",
        json={"status": "approved"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid status"
    current = client.get(f"/api/v1/rti-applications/{application_id}", headers=admin_headers)
    assert current.json()["data"]["status"] == "pending"


def test_list_filters_by_status(client, application_payload, admin_headers):
    ids = [
        client.post("/api/v1/rti-applications/public", json=application_payload).json()["data"]["id"]
        for _ in range(3)
    ]
    client.put(f"/api/v1/rti-applications/{ids[0]}/status", json={"status": "completed"}, headers=admin_headers)

    response = client.get("/api/v1/rti-applications", params={"status": "completed"}, headers=admin_headers)

    data = response.json()["data"]
    assert [item["id"] for item in data["items"]] == [ids[0]]
    assert data["pagination"]["total_pages"] == 1


def test_owner_deletes_application_other_user_cannot(client, application_payload, user_headers, other_headers):
    application_id = create_owned(client, application_payload, user_headers)["id"]
    url = f"/api/v1/rti-applications/{application_id}"

    assert client.delete(url, headers=other_headers).status_code == 403
    assert client.delete(url, headers=user_headers).status_code == 200
    assert client.get(url, headers=user_headers).status_code == 404


def test_missing_application_is_404(client, admin_headers):
    response = client.get("/api/v1/rti-applications/12345", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Application not found"}
