"""Local identity provider.

Holds login credentials, issues bearer tokens and resolves a token back to
an identity. The permission record (``User``) is a separate row looked up by
email, so a valid credential alone never grants access.
"""
import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from models import db
from models.user import Credential, RevokedToken, User
from app.exceptions import AuthError, ValidationError
from app.utils.jwt import (
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_token,
    new_jti,
)

logger = logging.getLogger(__name__)

TEMP_PASSWORD_LENGTH = 12
TEMP_PASSWORD_CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits + "!@#$%^&*"
MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class Identity:
    email: str
    jti: str
    role: Optional[str] = None


@dataclass(frozen=True)
class Session:
    email: str
    role: str
    jti: str
    access_token: str
    refresh_token: str
    must_change_password: bool = False


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_CHARSET) for _ in range(length))


def provision_credential(email: str, password: str, full_name: str = None) -> Credential:
    """Create the login credential for ``email``, or reset its password."""
    email = normalize_email(email)
    cred = Credential.query.filter_by(email=email).first()
    if cred is None:
        cred = Credential(email=email, full_name=full_name)
        db.session.add(cred)
    elif full_name:
        cred.full_name = full_name
    cred.password_hash = generate_password_hash(password)
    cred.must_change_password = True
    db.session.flush()
    logger.info({"event": "credential_provisioned", "email": email})
    return cred


def _role_for(email: str) -> str:
    record = User.query.filter_by(email=email).first()
    return record.role if record else "member"


def open_session(email: str) -> Session:
    role = _role_for(email)
    cred = Credential.query.filter_by(email=email).first()
    jti = new_jti()
    return Session(
        email=email,
        role=role,
        jti=jti,
        access_token=create_access_token(email, role, jti=jti),
        refresh_token=create_refresh_token(email, jti=jti),
        must_change_password=bool(cred and cred.must_change_password),
    )


def sign_in(email: str, password: str) -> Session:
    email = normalize_email(email)
    cred = Credential.query.filter_by(email=email).first()
    if not cred or not check_password_hash(cred.password_hash, password or ""):
        raise AuthError("Invalid email or password")
    cred.last_login_at = datetime.utcnow()
    return open_session(email)


def sign_out(jti: str, email: str = None) -> None:
    if not jti or RevokedToken.query.filter_by(jti=jti).first():
        return
    db.session.add(RevokedToken(jti=jti, email=email))
    db.session.flush()


def is_revoked(jti: str) -> bool:
    return RevokedToken.query.filter_by(jti=jti).first() is not None


def resolve_identity(token: str, expected_type: str = "access") -> Identity:
    """Map a bearer token to the identity it was issued for."""
    if not token:
        raise AuthError("Unauthorized")
    try:
        payload = decode_token(token, expected_type=expected_type)
    except TokenError as e:
        raise AuthError(str(e))
    jti = payload.get("jti")
    if not jti or is_revoked(jti):
        raise AuthError("token revoked")
    email = payload.get("sub")
    if not email or not Credential.query.filter_by(email=email).first():
        raise AuthError("Invalid token")
    return Identity(email=email, jti=jti, role=payload.get("role"))


def refresh_session(refresh_token: str) -> Session:
    identity = resolve_identity(refresh_token, expected_type="refresh")
    # Access and refresh tokens share a jti; retire the old pair
    sign_out(identity.jti, identity.email)
    return open_session(identity.email)


def change_password(email: str, current_password: str, new_password: str) -> None:
    cred = Credential.query.filter_by(email=email).first()
    if not cred or not check_password_hash(cred.password_hash, current_password or ""):
        raise AuthError("Current password is incorrect")
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")
    cred.password_hash = generate_password_hash(new_password)
    cred.must_change_password = False


def permission_record(email: str) -> Optional[User]:
    """Return the permission record when it grants orders access, else None.

    A missing record and a cleared flag both yield None.
    """
    record = User.query.filter_by(email=normalize_email(email)).first()
    if record is None or not record.orders_permission:
        return None
    return record
