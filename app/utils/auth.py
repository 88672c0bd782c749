from dataclasses import dataclass
from functools import wraps
from typing import Optional
from flask import request, g
from app.auth.permissions import role_has_scope
from app.exceptions import AuthError, PermissionDenied
from models.user import User

NO_PERMISSION_MESSAGE = "User does not have orders permission"


@dataclass(frozen=True)
class AuthenticatedRequest:
    """Per-request auth context built once at the boundary."""

    identity: object
    permission_flag: bool
    user: Optional[User] = None

    @property
    def email(self):
        return self.identity.email

    @property
    def role(self):
        return self.user.role if self.user else None


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return ""
    return auth.split(" ", 1)[1].strip()


def build_auth_context() -> AuthenticatedRequest:
    from app.services import identity

    token = bearer_token()
    if not token:
        raise AuthError("Unauthorized")
    ident = identity.resolve_identity(token)
    user = identity.permission_record(ident.email)
    ctx = AuthenticatedRequest(identity=ident, permission_flag=user is not None, user=user)
    g.auth = ctx
    return ctx


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        build_auth_context()
        return func(*args, **kwargs)

    return wrapper


def permission_required(func):
    """Require a valid bearer token whose permission record grants access."""

    @wraps(func)
    @auth_required
    def wrapper(*args, **kwargs):
        if not g.auth.permission_flag:
            raise PermissionDenied(NO_PERMISSION_MESSAGE)
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on user role or scoped action."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        @permission_required
        def wrapper(*args, **kwargs):
            role = g.auth.role
            if not role:
                raise PermissionDenied("Role missing")
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                raise PermissionDenied("Forbidden")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
