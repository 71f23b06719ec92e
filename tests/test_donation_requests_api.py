import math

import pytest

from conftest import REQUEST_PAYLOAD, bearer

REQUESTER = "requester@example.com"
DONOR_A = "donor.a@example.com"
DONOR_B = "donor.b@example.com"


def _create(client, email=REQUESTER, **overrides):
    payload = dict(REQUEST_PAYLOAD)
    payload.update(overrides)
    response = client.post("/donation-requests", json=payload, headers=bearer(email, "Requester"))
    assert response.status_code == 201, response.text
    return response.json()["insertedId"]


def test_create_requires_authentication(client):
    response = client.post("/donation-requests", json=REQUEST_PAYLOAD)

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized access"}


def test_create_ignores_status_and_donor_fields(client):
    payload = dict(REQUEST_PAYLOAD, status="done", donorEmail="x@example.com", requesterEmail="x@example.com")

    response = client.post("/donation-requests", json=payload, headers=bearer(REQUESTER, "Requester"))

    body = response.json()["request"]
    assert body["status"] == "pending"
    assert body["requesterEmail"] == REQUESTER
    assert body["requesterName"] == "Requester"
    assert "donorEmail" not in body
    assert "donatedAt" not in body


def test_create_validates_required_fields(client):
    payload = dict(REQUEST_PAYLOAD)
    del payload["bloodGroup"]

    response = client.post("/donation-requests", json=payload, headers=bearer(REQUESTER))

    assert response.status_code == 400
    assert "bloodGroup" in response.json()["message"]


def test_claim_flow_second_donor_gets_already_taken(client):
    request_id = _create(client)

    first = client.patch(f"/donation-requests/{request_id}/donate", headers=bearer(DONOR_A, "Donor A"))
    assert first.status_code == 200
    assert first.json()["request"]["status"] == "inprogress"
    assert first.json()["request"]["donorEmail"] == DONOR_A

    second = client.patch(f"/donation-requests/{request_id}/donate", headers=bearer(DONOR_B, "Donor B"))
    assert second.status_code == 404
    assert second.json()["message"] == "Donation request not found or already taken"

    current = client.get(f"/donation-requests/{request_id}", headers=bearer(REQUESTER)).json()
    assert current["donorEmail"] == DONOR_A
    assert current["donorName"] == "Donor A"


def test_claim_accepts_donor_name_from_body(client):
    request_id = _create(client)

    response = client.patch(
        f"/donation-requests/{request_id}/donate",
        headers=bearer(DONOR_A),
        json={"donorName": "Anonymous Hero"},
    )

    assert response.json()["request"]["donorName"] == "Anonymous Hero"


def test_get_distinguishes_invalid_and_missing_ids(client):
    headers = bearer(REQUESTER)

    assert client.get("/donation-requests/not-an-id", headers=headers).status_code == 400
    assert client.get("/donation-requests/0123456789abcdef01234567", headers=headers).status_code == 404


def test_requester_closes_out_request(client):
    request_id = _create(client)
    client.patch(f"/donation-requests/{request_id}/donate", headers=bearer(DONOR_A))

    denied = client.patch(
        f"/donation-requests/{request_id}/status",
        headers=bearer(DONOR_A),
        json={"status": "done"},
    )
    assert denied.status_code == 403

    invalid = client.patch(
        f"/donation-requests/{request_id}/status",
        headers=bearer(REQUESTER),
        json={"status": "archived"},
    )
    assert invalid.status_code == 400

    done = client.patch(
        f"/donation-requests/{request_id}/status",
        headers=bearer(REQUESTER),
        json={"status": "done"},
    )
    assert done.status_code == 200
    assert done.json()["request"]["status"] == "done"


def test_edit_only_by_owner_while_pending(client):
    request_id = _create(client)

    edited = client.patch(
        f"/donation-requests/{request_id}",
        headers=bearer(REQUESTER),
        json={"hospitalName": "Square Hospital", "status": "done"},
    )
    assert edited.status_code == 200
    assert edited.json()["request"]["hospitalName"] == "Square Hospital"
    assert edited.json()["request"]["status"] == "pending"

    stranger = client.patch(
        f"/donation-requests/{request_id}",
        headers=bearer(DONOR_B),
        json={"hospitalName": "Elsewhere"},
    )
    assert stranger.status_code == 403

    client.patch(f"/donation-requests/{request_id}/donate", headers=bearer(DONOR_A))
    locked = client.patch(
        f"/donation-requests/{request_id}",
        headers=bearer(REQUESTER),
        json={"hospitalName": "Elsewhere"},
    )
    assert locked.status_code == 400


def test_delete_rules(client, make_user):
    make_user("admin@example.com", role="admin")
    pending_id = _create(client)
    claimed_id = _create(client)
    client.patch(f"/donation-requests/{claimed_id}/donate", headers=bearer(DONOR_A))

    assert client.delete(f"/donation-requests/{pending_id}", headers=bearer(DONOR_B)).status_code == 403
    assert client.delete(f"/donation-requests/{pending_id}", headers=bearer(REQUESTER)).status_code == 200
    assert client.delete(f"/donation-requests/{claimed_id}", headers=bearer(REQUESTER)).status_code == 403
    assert client.delete(f"/donation-requests/{claimed_id}", headers=bearer("admin@example.com")).status_code == 200


def test_admin_listing_filters_and_paginates(client, make_user):
    make_user("admin@example.com", role="admin")
    done_ids = []
    for _ in range(7):
        request_id = _create(client)
        client.patch(f"/donation-requests/{request_id}/donate", headers=bearer(DONOR_A))
        client.patch(f"/donation-requests/{request_id}/status", headers=bearer(REQUESTER), json={"status": "done"})
        done_ids.append(request_id)
    _create(client, bloodGroup="A-")
    _create(client)

    response = client.get(
        "/donation-requests",
        headers=bearer("admin@example.com"),
        params={"status": "done", "bloodGroup": "O+", "limit": 3},
    )

    assert response.status_code == 200
    body = response.json()
    pagination = body["pagination"]
    assert pagination["totalRequests"] == 7
    assert pagination["totalPages"] == math.ceil(7 / 3)
    assert pagination["currentPage"] == 1
    assert pagination["hasNext"] is True
    assert pagination["hasPrev"] is False
    assert all(item["status"] == "done" and item["bloodGroup"] == "O+" for item in body["requests"])
    assert [item["_id"] for item in body["requests"]] == list(reversed(done_ids))[:3]


def test_admin_listing_access_policy(client, container, make_user):
    make_user("donor@example.com")

    assert client.get("/donation-requests").status_code == 401
    assert client.get("/donation-requests", headers=bearer("donor@example.com")).status_code == 403

    container.settings.admin_listing_public = True
    assert client.get("/donation-requests").status_code == 200


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 500}])
def test_listing_rejects_bad_pagination(client, container, params):
    container.settings.admin_listing_public = True

    assert client.get("/donation-requests", params=params).status_code == 400


def test_pending_feed_and_my_requests(client):
    first = _create(client)
    _create(client, district="Chattogram")
    _create(client, email=DONOR_B)
    client.patch(f"/donation-requests/{first}/donate", headers=bearer(DONOR_A))

    pending = client.get("/donation-requests/pending", params={"district": "DHAKA"}).json()
    assert pending["pagination"]["totalRequests"] == 1
    assert pending["requests"][0]["requesterEmail"] == DONOR_B

    mine = client.get("/donation-requests/mine", headers=bearer(REQUESTER)).json()
    assert mine["count"] == 2
    assert "pagination" not in mine

    capped = client.get("/donation-requests/mine", headers=bearer(REQUESTER), params={"limit": 1}).json()
    assert capped["count"] == 1
