from datetime import datetime
from models import db
from models.user import User
from app.exceptions import NotFoundError, ValidationError
from app.services.identity import normalize_email


def get_user(email: str) -> User:
    record = User.query.filter_by(email=normalize_email(email)).first()
    if not record:
        raise NotFoundError("User not found")
    return record


def list_users():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def create_user(email: str, role: str = "member", orders_permission: bool = False) -> User:
    email = normalize_email(email)
    if User.query.filter_by(email=email).first():
        raise ValidationError("A user record already exists for this email")
    record = User(email=email, role=role, orders_permission=orders_permission)
    db.session.add(record)
    db.session.flush()
    return record


def update_user(email: str, orders_permission=None, role=None) -> User:
    record = get_user(email)
    if isinstance(orders_permission, bool):
        record.orders_permission = orders_permission
    if role:
        record.role = role
    record.updated_at = datetime.utcnow()
    return record
