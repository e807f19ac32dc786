from lendtrack.services.auth_service import AuthService


def _register(client, username, headers=None, **extra):
    payload = {"username": username, "email": f"{username}@example.edu", "password": "pw-12345"}
    payload.update(extra)
    return client.post("/auth/register", json=payload, headers=headers or {})


def _login(client, username):
    return client.post("/auth/login", json={"username": username, "password": "pw-12345"})


def test_first_account_becomes_admin(client):
    r = _register(client, "root")
    assert r.status_code == 201
    assert r.get_json()["role"] == "admin"


def test_later_accounts_need_admin(client):
    _register(client, "root")
    assert _register(client, "intruder").status_code == 401

    token = _login(client, "root").get_json()["access_token"]
    r = _register(client, "desk", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 201
    assert r.get_json()["role"] == "staff"


def test_staff_cannot_register_accounts(client):
    _register(client, "root")
    admin_token = _login(client, "root").get_json()["access_token"]
    _register(client, "desk", headers={"Authorization": f"Bearer {admin_token}"})

    staff_token = _login(client, "desk").get_json()["access_token"]
    r = _register(client, "other", headers={"Authorization": f"Bearer {staff_token}"})
    assert r.status_code == 403


def test_login_and_me(client):
    _register(client, "root")

    assert _login(client, "nobody").status_code == 401

    r = _login(client, "root")
    assert r.status_code == 200
    token = r.get_json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).get_json()
    assert me["user"]["username"] == "root"
    assert me["user"]["role"] == "admin"


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_only_lowest_id_keeps_bootstrap_admin(app):
    # another first sign-up already committed between the count check and this insert
    AuthService.register("racer", "racer@example.edu", "pw-12345", role="admin")

    user = AuthService.bootstrap_admin("late", "late@example.edu", "pw-12345")
    assert user.role == "staff"


def test_non_object_body_is_rejected(client):
    r = client.post("/auth/login", json=[1, 2])
    assert r.status_code == 400
