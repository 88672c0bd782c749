from flask import Blueprint, g, request
from app.version import API_PREFIX
from app.schemas.access import ReviewAccessRequest, UserCreateRequest, UserUpdateRequest
from app.services import access_requests, users
from app.metrics import ACCESS_REVIEWS, EMAIL_FAILURES
from app.utils import ok, role_required, transactional, validate_schema

admin_bp = Blueprint("admin", __name__, url_prefix=API_PREFIX)


# --- Access requests ---

@admin_bp.route("/access-requests", methods=["GET"])
@role_required("admin:review_access")
def list_access_requests():
    reqs = access_requests.list_requests(request.args.get("status"))
    return ok([r.to_dict() for r in reqs])


@admin_bp.route("/approve-request", methods=["POST"])
@role_required("admin:review_access")
@validate_schema(ReviewAccessRequest)
def review_access_request():
    data = request.validated_data
    outcome = access_requests.review(data.requestId, data.action, data.adminNotes, reviewer=g.auth.email)
    ACCESS_REVIEWS.labels(outcome.action).inc()
    if not outcome.email_sent:
        EMAIL_FAILURES.labels(outcome.action).inc()

    if outcome.action == "reject":
        return ok({"request": outcome.request.to_dict()}, message="Access request rejected")

    body = {"request": outcome.request.to_dict(), "user": outcome.user.to_dict()}
    if not outcome.email_sent:
        body["temporaryPassword"] = outcome.temporary_password
        return ok(
            body,
            message="User created successfully, but email notification failed. Please manually send credentials.",
            status=201,
        )
    return ok(body, message="Access request approved and user account created successfully")


# --- Permission records ---

@admin_bp.route("/users", methods=["GET"])
@role_required("admin:manage_users")
def get_users():
    email = request.args.get("email")
    if email:
        return ok(users.get_user(email).to_dict())
    return ok([u.to_dict() for u in users.list_users()])


@admin_bp.route("/users", methods=["POST"])
@role_required("admin:manage_users")
@validate_schema(UserCreateRequest)
def create_user():
    data = request.validated_data
    with transactional("Failed to create user"):
        record = users.create_user(data.email, data.role, data.orders_permission)
    return ok(record.to_dict(), message="User created", status=201)


@admin_bp.route("/users", methods=["PUT"])
@role_required("admin:manage_users")
@validate_schema(UserUpdateRequest)
def update_user():
    data = request.validated_data
    with transactional("Failed to update user"):
        record = users.update_user(data.email, data.orders_permission, data.role)
    return ok(record.to_dict(), message="User updated")
