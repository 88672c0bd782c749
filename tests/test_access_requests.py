from models import db
from models.access_request import AccessRequest
from models.user import Credential, User
from app.services import identity
from app.services.identity import TEMP_PASSWORD_CHARSET, TEMP_PASSWORD_LENGTH


def submit(client, api, email="newbie@example.com", name="New Bie", reason="Weekend shifts"):
    return client.post(f"{api}/access-requests", json={"email": email, "full_name": name, "reason": reason})


def review(client, api, headers, request_id, action, notes=None):
    body = {"requestId": request_id, "action": action}
    if notes is not None:
        body["adminNotes"] = notes
    return client.post(f"{api}/approve-request", json=body, headers=headers)


def test_submit_creates_pending_request_and_notifies_admin(client, api, mailer):
    resp = submit(client, api, email="  NewBie@Example.com ")
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["email"] == "newbie@example.com"
    assert data["status"] == "pending"

    notices = mailer.to("owner@example.com")
    assert len(notices) == 1
    assert "New Bie" in notices[0].html


def test_submit_escapes_user_text_in_admin_email(client, api, mailer):
    submit(client, api, name="<b>Eve</b>")
    assert "&lt;b&gt;Eve&lt;/b&gt;" in mailer.to("owner@example.com")[0].html


def test_duplicate_request_is_rejected(client, api, mailer):
    assert submit(client, api).status_code == 201
    resp = submit(client, api, email="NEWBIE@example.com")
    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["message"]
    assert AccessRequest.query.count() == 1


def test_submit_validates_input(client, api, mailer):
    assert submit(client, api, email="not-an-email").status_code == 400
    assert submit(client, api, name="   ").status_code == 400


def test_submit_survives_mail_outage(client, api, mailer):
    mailer.fail = True
    assert submit(client, api).status_code == 201
    assert AccessRequest.query.count() == 1


def test_approve_provisions_credential_and_permission(client, api, admin_headers, mailer):
    req_id = submit(client, api).get_json()["data"]["id"]
    resp = review(client, api, admin_headers, req_id, "approve", notes="welcome")
    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert body["request"]["status"] == "approved"
    assert body["request"]["reviewed_by"] == "boss@example.com"
    assert body["user"]["orders_permission"] is True
    assert "temporaryPassword" not in body

    cred = Credential.query.filter_by(email="newbie@example.com").one()
    assert cred.must_change_password is True
    record = User.query.filter_by(email="newbie@example.com").one()
    assert record.role == "member"

    welcome = mailer.to("newbie@example.com")
    assert len(welcome) == 1
    assert "Temporary Password" in welcome[0].html


def test_approved_user_can_sign_in_with_emailed_password(client, api, admin_headers, mailer, monkeypatch):
    monkeypatch.setattr(identity, "generate_temporary_password", lambda: "Temp0rary!pw")
    req_id = submit(client, api).get_json()["data"]["id"]
    review(client, api, admin_headers, req_id, "approve")
    assert "Temp0rary!pw" in mailer.to("newbie@example.com")[0].html

    resp = client.post(f"{api}/auth/login", json={"email": "newbie@example.com", "password": "Temp0rary!pw"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["mustChangePassword"] is True


def test_review_is_one_shot(client, api, admin_headers, mailer):
    req_id = submit(client, api).get_json()["data"]["id"]
    assert review(client, api, admin_headers, req_id, "reject").status_code == 200
    resp = review(client, api, admin_headers, req_id, "approve")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "This request has already been reviewed"
    assert db.session.get(AccessRequest, req_id).status == "rejected"
    assert Credential.query.filter_by(email="newbie@example.com").first() is None


def test_reject_sends_notes_and_tolerates_mail_failure(client, api, admin_headers, mailer):
    first = submit(client, api, email="a@example.com").get_json()["data"]["id"]
    resp = review(client, api, admin_headers, first, "reject", notes="Not staff")
    assert resp.status_code == 200
    assert "Not staff" in mailer.to("a@example.com")[0].html

    second = submit(client, api, email="b@example.com").get_json()["data"]["id"]
    mailer.fail = True
    resp = review(client, api, admin_headers, second, "reject")
    assert resp.status_code == 200
    assert db.session.get(AccessRequest, second).status == "rejected"
    assert User.query.filter_by(email="b@example.com").first() is None


def test_approve_with_mail_failure_returns_password(client, api, admin_headers, mailer):
    req_id = submit(client, api).get_json()["data"]["id"]
    mailer.fail = True
    resp = review(client, api, admin_headers, req_id, "approve")
    assert resp.status_code == 201
    payload = resp.get_json()
    assert "email notification failed" in payload["message"]
    password = payload["data"]["temporaryPassword"]
    assert len(password) == TEMP_PASSWORD_LENGTH
    assert db.session.get(AccessRequest, req_id).status == "approved"


def test_failed_provisioning_leaves_request_pending(client, api, admin_headers, mailer, monkeypatch):
    req_id = submit(client, api).get_json()["data"]["id"]

    def broken(*args, **kwargs):
        raise RuntimeError("identity provider down")

    monkeypatch.setattr(identity, "provision_credential", broken)
    resp = review(client, api, admin_headers, req_id, "approve")
    assert resp.status_code == 500
    assert "identity provider down" not in resp.get_data(as_text=True)

    assert db.session.get(AccessRequest, req_id).status == "pending"
    assert User.query.filter_by(email="newbie@example.com").first() is None
    assert mailer.to("newbie@example.com") == []


def test_review_unknown_request_is_404(client, api, admin_headers):
    assert review(client, api, admin_headers, 999, "approve").status_code == 404


def test_review_rejects_unknown_action(client, api, admin_headers):
    assert review(client, api, admin_headers, 1, "maybe").status_code == 400


def test_only_admins_review(client, api, member_headers, mailer):
    req_id = submit(client, api).get_json()["data"]["id"]
    assert review(client, api, member_headers, req_id, "approve").status_code == 403
    assert client.get(f"{api}/access-requests", headers=member_headers).status_code == 403
    assert client.post(f"{api}/approve-request", json={"requestId": req_id, "action": "approve"}).status_code == 401


def test_admin_lists_requests_by_status(client, api, admin_headers, mailer):
    first = submit(client, api, email="a@example.com").get_json()["data"]["id"]
    submit(client, api, email="b@example.com")
    review(client, api, admin_headers, first, "reject")

    everything = client.get(f"{api}/access-requests", headers=admin_headers).get_json()["data"]
    assert {r["email"] for r in everything} == {"a@example.com", "b@example.com"}
    pending = client.get(f"{api}/access-requests?status=pending", headers=admin_headers).get_json()["data"]
    assert [r["email"] for r in pending] == ["b@example.com"]
    assert client.get(f"{api}/access-requests?status=bogus", headers=admin_headers).status_code == 400


def test_temporary_password_shape():
    for _ in range(50):
        pw = identity.generate_temporary_password()
        assert len(pw) == 12
        assert set(pw) <= set(TEMP_PASSWORD_CHARSET)
