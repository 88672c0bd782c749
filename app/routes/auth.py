from flask import Blueprint, current_app, g, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.schemas.auth import ChangePasswordRequest, LoginRequest, RefreshRequest
from app.services import identity
from app.utils import auth_required, bearer_token, error, ok, transactional, validate_schema
from app.utils.auth import NO_PERMISSION_MESSAGE, build_auth_context

auth_bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)


def _session_payload(session, record):
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        "mustChangePassword": session.must_change_password,
        "user": record.to_dict(),
    }


def _no_permission():
    return error(NO_PERMISSION_MESSAGE, status=403, hasPermission=False)


# --- Login ---

@auth_bp.route("/auth/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data = request.validated_data
    with transactional("Login failed"):
        session = identity.sign_in(data.email, data.password)
        record = identity.permission_record(session.email)
        if record is None:
            # No logged-in-but-forbidden sessions
            identity.sign_out(session.jti, session.email)
    if record is None:
        current_app.logger.info({"event": "login_denied", "email": session.email})
        return _no_permission()
    return ok(_session_payload(session, record), message="Logged in")


@auth_bp.route("/auth/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    with transactional("Token refresh failed"):
        session = identity.refresh_session(request.validated_data.refresh_token)
        record = identity.permission_record(session.email)
        if record is None:
            identity.sign_out(session.jti, session.email)
    if record is None:
        return _no_permission()
    return ok(_session_payload(session, record))


@auth_bp.route("/auth/logout", methods=["POST"])
@auth_required
def logout():
    with transactional("Logout failed"):
        identity.sign_out(g.auth.identity.jti, g.auth.email)
    return ok(message="Logged out")


@auth_bp.route("/auth/change-password", methods=["POST"])
@auth_required
@validate_schema(ChangePasswordRequest)
def change_password():
    data = request.validated_data
    with transactional("Failed to change password"):
        identity.change_password(g.auth.email, data.current_password, data.new_password)
    return ok(message="Password updated")


# --- Permission check ---

@auth_bp.route("/verify-permission", methods=["GET"])
def verify_permission():
    if not bearer_token():
        return error("Unauthorized", status=401)
    ctx = build_auth_context()
    if not ctx.permission_flag:
        return _no_permission()
    return ok({"user": ctx.user.to_dict(), "hasPermission": True})
