from conftest import bearer


def test_repeat_registration_is_idempotent(client, persistence):
    payload = {"email": "Donor@Example.com", "name": "Karim", "bloodGroup": "A+", "role": "admin"}

    first = client.post("/users", json=payload)
    second = client.post("/users", json=payload)

    assert first.status_code == 201
    assert first.json()["created"] is True
    assert second.status_code == 200
    assert second.json() == {"insertedId": first.json()["insertedId"], "created": False}
    assert persistence.count_users({"email": "donor@example.com"}) == 1

    user = persistence.get_user_by_email("donor@example.com")
    assert user.role == "donor"
    assert user.status == "active"
    assert user.blood_group == "A+"


def test_registration_requires_valid_email(client):
    response = client.post("/users", json={"email": "not-an-email"})

    assert response.status_code == 400
    assert "message" in response.json()


def test_role_lookup_defaults_for_unknown_user(client, make_user):
    make_user("admin@example.com", role="admin")

    assert client.get("/users/role/ADMIN@example.com").json() == {"role": "admin", "status": "active"}
    assert client.get("/users/role/nobody@example.com").json() == {"role": "donor", "status": "active"}


def test_profile_read_and_update(client, make_user):
    make_user("donor@example.com", name="Karim")
    headers = bearer("donor@example.com")

    profile = client.get("/users/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["name"] == "Karim"

    updated = client.patch(
        "/users/profile",
        headers=headers,
        json={"district": "Khulna", "role": "admin", "email": "other@example.com"},
    )
    assert updated.status_code == 200
    body = updated.json()["user"]
    assert body["district"] == "Khulna"
    assert body["role"] == "donor"
    assert body["email"] == "donor@example.com"


def test_profile_requires_credentials(client):
    assert client.get("/users/profile").status_code == 401
    assert client.get("/users/profile", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/users/profile", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_admin_user_management(client, make_user):
    make_user("admin@example.com", role="admin")
    target = make_user("donor@example.com")
    admin_headers = bearer("admin@example.com")

    listing = client.get("/users", headers=admin_headers, params={"limit": 1})
    assert listing.status_code == 200
    assert listing.json()["pagination"]["totalUsers"] == 2
    assert listing.json()["pagination"]["totalPages"] == 2

    blocked = client.patch(f"/users/{target.id}/status", headers=admin_headers, json={"status": "blocked"})
    assert blocked.status_code == 200
    assert blocked.json()["user"]["status"] == "blocked"

    promoted = client.patch(f"/users/{target.id}/role", headers=admin_headers, json={"role": "admin"})
    assert promoted.json()["user"]["role"] == "admin"

    blocked_only = client.get("/users", headers=admin_headers, params={"status": "blocked"})
    assert [user["email"] for user in blocked_only.json()["users"]] == ["donor@example.com"]


def test_admin_user_management_errors(client, make_user):
    make_user("admin@example.com", role="admin")
    target = make_user("donor@example.com")
    admin_headers = bearer("admin@example.com")

    invalid_role = client.patch(f"/users/{target.id}/role", headers=admin_headers, json={"role": "owner"})
    assert invalid_role.status_code == 400

    bad_id = client.patch("/users/xyz/status", headers=admin_headers, json={"status": "blocked"})
    assert bad_id.status_code == 400
    assert bad_id.json()["message"] == "Invalid id"

    missing = client.patch(
        "/users/0123456789abcdef01234567/status",
        headers=admin_headers,
        json={"status": "blocked"},
    )
    assert missing.status_code == 404


def test_admin_routes_refuse_non_admins(client, make_user):
    make_user("donor@example.com")

    assert client.get("/users").status_code == 401
    assert client.get("/users", headers=bearer("donor@example.com")).status_code == 403
    assert client.get("/users", headers=bearer("ghost@example.com")).status_code == 403


def test_blocked_admin_is_refused(client, make_user):
    make_user("admin@example.com", role="admin", status="blocked")

    assert client.get("/users", headers=bearer("admin@example.com")).status_code == 403


def test_donor_search_excludes_blocked_and_non_matching(client, make_user):
    make_user("match@example.com", bloodGroup="B-", district="Dhaka", name="Match")
    make_user("blocked@example.com", status="blocked", bloodGroup="B-", district="Dhaka")
    make_user("other-group@example.com", bloodGroup="A+", district="Dhaka")
    make_user("other-district@example.com", bloodGroup="B-", district="Sylhet")
    make_user("admin@example.com", role="admin", bloodGroup="B-", district="Dhaka")

    response = client.get("/donors/search", params={"bloodGroup": "B-", "district": "Dhaka"})

    assert response.status_code == 200
    assert [donor["email"] for donor in response.json()["donors"]] == ["match@example.com"]
