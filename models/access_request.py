from models import db, BIGINT
from datetime import datetime

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"


class AccessRequest(db.Model):
    __tablename__ = "access_request"

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    full_name = db.Column(db.String(150), nullable=False)
    reason = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=PENDING)  # pending, approved, rejected
    admin_notes = db.Column(db.Text, nullable=True)
    reviewed_by = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    reviewed_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "reason": self.reason,
            "status": self.status,
            "admin_notes": self.admin_notes,
            "reviewed_by": self.reviewed_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
        }
