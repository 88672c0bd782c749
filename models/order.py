from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from models import BIGINT
from models import db
from datetime import datetime

PAYMENT_TYPES = ("Cash", "E-transfer", "Credit Card")


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_paid_created", "is_paid", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    customer_name = Column(String(150), nullable=False)
    total_cost = Column(db.Numeric(12, 2), nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    payment_type = Column(String(20), nullable=True)  # Cash, E-transfer, Credit Card
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        lazy=True,
        order_by="OrderItem.id",
    )

    def to_dict(self, include_items=True):
        data = {
            "id": self.id,
            "customer_name": self.customer_name,
            "total_cost": float(self.total_cost),
            "is_paid": self.is_paid,
            "payment_type": self.payment_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_items:
            data["order_items"] = [oi.to_dict() for oi in self.items]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id"), nullable=False, index=True)
    item_id = db.Column(BIGINT, db.ForeignKey("item.id", ondelete="SET NULL"), nullable=True)
    quantity = db.Column(db.Integer, nullable=False)

    # Snapshots taken when the line is written; never refreshed from the catalog
    price_at_time = db.Column(db.Numeric(10, 2), nullable=False)
    item_name_at_time = db.Column(db.String(255), nullable=False)
    item_category_at_time = db.Column(db.String(100), nullable=True)

    item = db.relationship("Item", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "item_id": self.item_id,
            "quantity": self.quantity,
            "price_at_time": float(self.price_at_time),
            "item_name_at_time": self.item_name_at_time,
            "item_category_at_time": self.item_category_at_time,
        }
