"""Access-request workflow.

A request is created ``pending`` and reviewed exactly once. Approval
provisions a login credential and a permission record in the same database
transaction as the status change; the credential email is sent only after
that transaction commits.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models import db
from models.access_request import AccessRequest, PENDING, APPROVED, REJECTED
from models.user import User
from app.exceptions import NotFoundError, StateError, ValidationError
from app.services import identity, mailer
from app.tasks.notifications import enqueue_email
from app.utils.db import transactional

logger = logging.getLogger(__name__)

STATUSES = (PENDING, APPROVED, REJECTED)


@dataclass
class ReviewOutcome:
    request: AccessRequest
    action: str
    email_sent: bool = True
    temporary_password: Optional[str] = None
    user: Optional[User] = None


def submit_request(email: str, full_name: str, reason: str = None) -> AccessRequest:
    email = identity.normalize_email(email)
    full_name = (full_name or "").strip()
    if not email or not full_name:
        raise ValidationError("Email and full name are required")
    if AccessRequest.query.filter_by(email=email).first():
        raise ValidationError(
            "An access request already exists for this email. Please wait for admin approval."
        )
    with transactional("Failed to create access request"):
        req = AccessRequest(email=email, full_name=full_name, reason=(reason or "").strip() or None)
        db.session.add(req)
    enqueue_email(mailer.admin_new_request_email(req))
    return req


def list_requests(status: Optional[str] = None):
    q = AccessRequest.query
    if status:
        if status not in STATUSES:
            raise ValidationError(f"status must be one of: {', '.join(STATUSES)}")
        q = q.filter_by(status=status)
    return q.order_by(AccessRequest.created_at.desc(), AccessRequest.id.desc()).all()


def get_request(request_id: int) -> AccessRequest:
    req = db.session.get(AccessRequest, request_id)
    if not req:
        raise NotFoundError("Access request not found")
    return req


def _grant_permission(email: str) -> User:
    record = User.query.filter_by(email=email).first()
    if record is None:
        record = User(email=email, role="member", orders_permission=True)
        db.session.add(record)
    else:
        record.orders_permission = True
        record.updated_at = datetime.utcnow()
    db.session.flush()
    return record


def _mark_reviewed(req: AccessRequest, status: str, admin_notes: str, reviewer: str) -> None:
    if req.status != PENDING:
        raise StateError("This request has already been reviewed")
    req.status = status
    req.admin_notes = admin_notes
    req.reviewed_by = reviewer
    req.reviewed_at = datetime.utcnow()


def approve(request_id: int, admin_notes: str = None, reviewer: str = None) -> ReviewOutcome:
    req = get_request(request_id)
    temporary_password = identity.generate_temporary_password()
    with transactional("Failed to create user account"):
        _mark_reviewed(req, APPROVED, admin_notes, reviewer)
        identity.provision_credential(req.email, temporary_password, full_name=req.full_name)
        user = _grant_permission(req.email)

    outcome = ReviewOutcome(request=req, action="approve", user=user)
    try:
        mailer.send_email(mailer.approval_email(req, temporary_password))
    except Exception as e:
        logger.error("Error sending welcome email to request %s: %s", req.id, e)
        outcome.email_sent = False
        outcome.temporary_password = temporary_password
    return outcome


def reject(request_id: int, admin_notes: str = None, reviewer: str = None) -> ReviewOutcome:
    req = get_request(request_id)
    with transactional("Failed to update access request"):
        _mark_reviewed(req, REJECTED, admin_notes, reviewer)

    outcome = ReviewOutcome(request=req, action="reject")
    try:
        mailer.send_email(mailer.rejection_email(req, admin_notes))
    except Exception as e:
        logger.error("Error sending rejection email to request %s: %s", req.id, e)
        outcome.email_sent = False
    return outcome


def review(request_id: int, action: str, admin_notes: str = None, reviewer: str = None) -> ReviewOutcome:
    if action == "approve":
        return approve(request_id, admin_notes, reviewer)
    if action == "reject":
        return reject(request_id, admin_notes, reviewer)
    raise ValidationError("action must be approve or reject")
