# tests/e2e/test_identity_api.py
from fastapi.testclient import TestClient


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email="user@example.com", name="User", password="secret1"):
    return client.post("/api/identity/register", json={"email": email, "display_name": name, "password": password})


def login(client: TestClient, email="user@example.com", password="secret1") -> str:
    r = client.post("/api/identity/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["token"]


def test_register_login_me_logout(client: TestClient):
    r = register(client, email=" User@Example.com ")
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["email"] == "user@example.com"
    assert body["data"]["role"] == "Member"
    assert "password_hash" not in body["data"]

    token = login(client, email="USER@example.com")
    me = client.get("/api/identity/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["data"]["id"] == body["data"]["id"]

    assert client.post("/api/identity/logout", headers=bearer(token)).status_code == 200
    assert client.get("/api/identity/me", headers=bearer(token)).status_code == 401
    # logging out again, or without a token, still succeeds
    assert client.post("/api/identity/logout", headers=bearer(token)).status_code == 200
    assert client.post("/api/identity/logout").status_code == 200


def test_register_duplicate_and_validation(client: TestClient):
    assert register(client).status_code == 201
    r = register(client, email="USER@example.com")
    assert r.status_code == 409
    assert r.json()["code"] == "conflict"

    r = register(client, email="bad", name="U", password="123")
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"


def test_login_failure_is_generic(client: TestClient):
    register(client)
    wrong = client.post("/api/identity/login", json={"email": "user@example.com", "password": "nope"})
    unknown = client.post("/api/identity/login", json={"email": "who@example.com", "password": "secret1"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["message"] == unknown.json()["message"] == "Invalid email or password"


def test_user_endpoints_require_token(client: TestClient):
    for path in ["/api/identity/me", "/api/identity/users", "/api/identity/users/x", "/api/identity/users/x/theme"]:
        assert client.get(path).status_code == 401
        assert client.get(path, headers={"Authorization": "Basic abc"}).status_code == 401
        assert client.get(path, headers=bearer("not-a-token")).status_code == 401


def test_users_and_theme(client: TestClient):
    user_id = register(client).json()["data"]["id"]
    headers = bearer(login(client))

    listed = client.get("/api/identity/users", headers=headers).json()["data"]
    assert [u["id"] for u in listed] == [user_id]
    assert client.get(f"/api/identity/users/{user_id}", headers=headers).json()["data"]["email"] == "user@example.com"
    missing = client.get("/api/identity/users/missing", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["code"] == "user_not_found"

    theme_url = f"/api/identity/users/{user_id}/theme"
    assert client.get(theme_url, headers=headers).json()["data"] == {"web": "dark", "pwa": "dark"}

    r = client.put(theme_url, headers=headers, json={"platform": "pwa", "theme": "light"})
    assert r.status_code == 200
    assert r.json()["data"] == {"web": "dark", "pwa": "light"}

    r = client.put(theme_url, headers=headers, json={"platform": "web", "theme": "Blue"})
    assert r.json()["data"]["web"] == "dark"

    r = client.put(theme_url, headers=headers, json={"platform": "watch", "theme": "light"})
    assert r.status_code == 422


def test_theme_of_another_user_is_forbidden(client: TestClient):
    victim_id = register(client, email="victim@example.com").json()["data"]["id"]
    register(client, email="mallory@example.com")
    mallory = bearer(login(client, email="mallory@example.com"))
    theme_url = f"/api/identity/users/{victim_id}/theme"

    r = client.put(theme_url, headers=mallory, json={"platform": "web", "theme": "light"})
    assert r.status_code == 403
    assert r.json()["code"] == "forbidden"
    assert client.get(theme_url, headers=mallory).status_code == 403

    owner = bearer(login(client, email="victim@example.com"))
    assert client.get(theme_url, headers=owner).json()["data"] == {"web": "dark", "pwa": "dark"}


def test_admin_login_and_gate(client: TestClient, admin_headers):
    bad = client.post("/api/identity/admin/login", json={"username": "root", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json()["code"] == "invalid_credentials"

    assert client.get("/api/identity/admin/organizations").status_code == 401
    assert client.get("/api/identity/admin/organizations", headers=admin_headers).status_code == 200

    # a user token never opens the admin surface
    register(client)
    user_headers = bearer(login(client))
    assert client.get("/api/identity/admin/organizations", headers=user_headers).status_code == 401

    assert client.post("/api/identity/admin/logout", headers=admin_headers).status_code == 200
    assert client.get("/api/identity/admin/organizations", headers=admin_headers).status_code == 401


def test_organization_lifecycle(client: TestClient, admin_headers):
    base = "/api/identity/admin/organizations"
    r = client.post(base, headers=admin_headers, json={"name": "Acme", "slug": "ACME Corp", "description": "Widgets"})
    assert r.status_code == 201
    org = r.json()["data"]
    assert org["slug"] == "acme-corp"
    assert org["is_active"] is True

    dup = client.post(base, headers=admin_headers, json={"name": "Acme 2", "slug": " acme-corp "})
    assert dup.status_code == 409

    r = client.put(f"{base}/{org['id']}", headers=admin_headers, json={"name": "Acme Inc", "description": "", "is_active": True})
    assert r.json()["data"]["name"] == "Acme Inc"
    assert r.json()["data"]["slug"] == "acme-corp"

    for _ in range(2):
        r = client.delete(f"{base}/{org['id']}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["data"]["is_active"] is False

    assert client.get(f"{base}/{org['id']}", headers=admin_headers).json()["data"]["is_active"] is False
    assert client.get(f"{base}/missing", headers=admin_headers).status_code == 404
    assert client.delete(f"{base}/missing", headers=admin_headers).status_code == 404
    assert len(client.get(base, headers=admin_headers).json()["data"]) == 1


def test_tenant_admin_management(client: TestClient, admin_headers):
    org_id = client.post(
        "/api/identity/admin/organizations", headers=admin_headers, json={"name": "Acme", "slug": "acme"}
    ).json()["data"]["id"]
    admins = f"/api/identity/admin/organizations/{org_id}/admins"
    payload = {"email": "boss@acme.io", "display_name": "Boss", "password": "secret1"}

    r = client.post(admins, headers=admin_headers, json=payload)
    assert r.status_code == 201
    admin = r.json()["data"]
    assert (admin["email"], admin["role"]) == ("boss@acme.io", "Admin")

    assert client.post(admins, headers=admin_headers, json=payload).status_code == 409
    listed = client.get(admins, headers=admin_headers).json()["data"]
    assert [a["id"] for a in listed] == [admin["id"]]

    # the new admin can sign in and see the organization's members
    token = login(client, "boss@acme.io", "secret1")
    members = client.get(f"/api/identity/organizations/{org_id}/members", headers=bearer(token))
    assert members.status_code == 200
    assert members.json()["data"][0]["role"] == "Admin"

    assert client.delete(f"{admins}/{admin['id']}", headers=admin_headers).status_code == 200
    again = client.delete(f"{admins}/{admin['id']}", headers=admin_headers)
    assert again.status_code == 404
    assert again.json()["code"] == "membership_not_found"

    # after removal the same user is forbidden from the member listing
    members = client.get(f"/api/identity/organizations/{org_id}/members", headers=bearer(token))
    assert members.status_code == 403

    assert client.post("/api/identity/admin/organizations/missing/admins", headers=admin_headers, json=payload).status_code == 404


def test_app_token_views_user_surface_as_superadmin(client: TestClient, admin_headers):
    assert client.post("/api/identity/admin/app-token").status_code == 401

    r = client.post("/api/identity/admin/app-token", headers=admin_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["id"] == "superadmin"
    assert data["role"] == "SuperAdmin"

    me = client.get("/api/identity/me", headers=bearer(data["token"])).json()["data"]
    assert me == {"id": "superadmin", "email": "admin@agilesync.local", "display_name": "Super Admin", "role": "SuperAdmin"}

    # the impersonation token is a user token, not an admin token
    assert client.get("/api/identity/admin/organizations", headers=bearer(data["token"])).status_code == 401


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-ID"]
