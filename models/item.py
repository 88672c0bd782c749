# --- models/item.py ---
from models import db, BIGINT
from datetime import datetime


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Item(db.Model):
    __tablename__ = "item"

    id = db.Column(BIGINT, primary_key=True)
    category_id = db.Column(BIGINT, db.ForeignKey("category.id"), nullable=False)
    name = db.Column(db.String(100), nullable=False)

    # Pricing: null when the price is chosen per order line
    price = db.Column(db.Numeric(10, 2), nullable=True)
    has_custom_price = db.Column(db.Boolean, default=False, nullable=False)

    image_url = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = db.relationship("Category", backref=db.backref("items", lazy=True))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "price": float(self.price) if self.price is not None else None,
            "has_custom_price": self.has_custom_price,
            "image_url": self.image_url,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "category": self.category.to_dict() if self.category else None,
        }
