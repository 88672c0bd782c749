def test_admin_manages_permission_records(client, api, admin_headers, login_as):
    created = client.post(
        f"{api}/users", json={"email": "Clerk@Example.com", "orders_permission": True}, headers=admin_headers
    )
    assert created.status_code == 201
    assert created.get_json()["data"]["email"] == "clerk@example.com"
    assert created.get_json()["data"]["role"] == "member"

    dup = client.post(f"{api}/users", json={"email": "clerk@example.com"}, headers=admin_headers)
    assert dup.status_code == 400

    listed = client.get(f"{api}/users", headers=admin_headers).get_json()["data"]
    assert {u["email"] for u in listed} == {"boss@example.com", "clerk@example.com"}

    resp = client.put(f"{api}/users", json={"email": "clerk@example.com", "orders_permission": False}, headers=admin_headers)
    assert resp.status_code == 200
    one = client.get(f"{api}/users?email=clerk@example.com", headers=admin_headers).get_json()["data"]
    assert one["orders_permission"] is False


def test_unknown_user_is_404(client, api, admin_headers):
    assert client.get(f"{api}/users?email=ghost@example.com", headers=admin_headers).status_code == 404
    resp = client.put(f"{api}/users", json={"email": "ghost@example.com", "role": "admin"}, headers=admin_headers)
    assert resp.status_code == 404


def test_role_must_be_known(client, api, admin_headers):
    resp = client.post(f"{api}/users", json={"email": "x@example.com", "role": "owner"}, headers=admin_headers)
    assert resp.status_code == 400


def test_members_cannot_manage_users(client, api, member_headers):
    assert client.get(f"{api}/users", headers=member_headers).status_code == 403
    assert client.post(f"{api}/users", json={"email": "x@example.com"}, headers=member_headers).status_code == 403


def test_admin_without_orders_flag_is_denied(client, api, login_as):
    headers = login_as("lapsed@example.com", role="admin", orders_permission=False)
    assert client.get(f"{api}/users", headers=headers).status_code == 403
