from models import db
from models.user import Credential, RevokedToken, User
from app.utils.auth import NO_PERMISSION_MESSAGE


def login(client, api, email, password="correct-horse"):
    return client.post(f"{api}/auth/login", json={"email": email, "password": password})


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def test_login_returns_tokens_and_record(client, api, login_as):
    login_as("cashier@example.com")
    resp = login(client, api, "Cashier@Example.com ")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["access_token"] and data["refresh_token"]
    assert data["user"]["email"] == "cashier@example.com"
    assert data["mustChangePassword"] is True
    assert Credential.query.filter_by(email="cashier@example.com").one().last_login_at is not None


def test_login_with_wrong_password(client, api, login_as):
    login_as("cashier@example.com")
    resp = login(client, api, "cashier@example.com", "wrong")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid email or password"
    assert login(client, api, "ghost@example.com").status_code == 401


def test_login_without_permission_is_refused_and_revoked(client, api, login_as):
    login_as("norecord@example.com", orders_permission=None)
    resp = login(client, api, "norecord@example.com")
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["hasPermission"] is False
    assert body["message"] == NO_PERMISSION_MESSAGE
    assert RevokedToken.query.filter_by(email="norecord@example.com").count() == 1


def test_verify_permission_granted(client, api, member_headers):
    resp = client.get(f"{api}/verify-permission", headers=member_headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["hasPermission"] is True
    assert data["user"]["email"] == "cashier@example.com"


def test_verify_permission_denials_are_indistinguishable(client, api, login_as):
    no_record = login_as("a@example.com", orders_permission=None)
    flag_off = login_as("b@example.com", orders_permission=False)
    first = client.get(f"{api}/verify-permission", headers=no_record)
    second = client.get(f"{api}/verify-permission", headers=flag_off)
    assert first.status_code == second.status_code == 403
    assert first.get_json() == second.get_json()
    assert first.get_json()["hasPermission"] is False


def test_verify_permission_needs_a_valid_token(client, api):
    assert client.get(f"{api}/verify-permission").status_code == 401
    assert client.get(f"{api}/verify-permission", headers=auth_header("garbage")).status_code == 401


def test_permission_change_applies_to_live_tokens(client, api, member_headers):
    assert client.get(f"{api}/orders", headers=member_headers).status_code == 200
    User.query.filter_by(email="cashier@example.com").update({User.orders_permission: False})
    db.session.commit()
    resp = client.get(f"{api}/orders", headers=member_headers)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == NO_PERMISSION_MESSAGE


def test_protected_routes_need_a_token(client, api):
    assert client.get(f"{api}/orders").status_code == 401
    assert client.get(f"{api}/items").status_code == 401
    assert client.get(f"{api}/reports").status_code == 401


def test_logout_revokes_the_token(client, api, member_headers):
    assert client.post(f"{api}/auth/logout", headers=member_headers).status_code == 200
    assert client.get(f"{api}/verify-permission", headers=member_headers).status_code == 401


def test_refresh_rotates_the_pair(client, api, login_as):
    login_as("cashier@example.com")
    tokens = login(client, api, "cashier@example.com").get_json()["data"]

    resp = client.post(f"{api}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200
    fresh = resp.get_json()["data"]
    assert fresh["access_token"] != tokens["access_token"]

    assert client.get(f"{api}/verify-permission", headers=auth_header(fresh["access_token"])).status_code == 200
    assert client.get(f"{api}/verify-permission", headers=auth_header(tokens["access_token"])).status_code == 401
    replay = client.post(f"{api}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert replay.status_code == 401


def test_access_token_is_not_a_refresh_token(client, api, login_as):
    login_as("cashier@example.com")
    tokens = login(client, api, "cashier@example.com").get_json()["data"]
    resp = client.post(f"{api}/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 401


def test_change_password(client, api, member_headers):
    url = f"{api}/auth/change-password"
    wrong = client.post(url, json={"current_password": "nope", "new_password": "long-enough"}, headers=member_headers)
    assert wrong.status_code == 401
    short = client.post(url, json={"current_password": "correct-horse", "new_password": "short"}, headers=member_headers)
    assert short.status_code == 400

    resp = client.post(url, json={"current_password": "correct-horse", "new_password": "battery-staple"}, headers=member_headers)
    assert resp.status_code == 200
    assert login(client, api, "cashier@example.com").status_code == 401
    relogin = login(client, api, "cashier@example.com", "battery-staple")
    assert relogin.status_code == 200
    assert relogin.get_json()["data"]["mustChangePassword"] is False


def test_permission_guard_on_plain_route(client, member_headers, login_as):
    assert client.get("/__protected").status_code == 401
    denied = login_as("nobody@example.com", orders_permission=False)
    assert client.get("/__protected", headers=denied).status_code == 403
    assert client.get("/__protected", headers=member_headers).get_json()["data"] == {"pong": "permitted"}
