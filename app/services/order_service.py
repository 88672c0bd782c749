import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional

from models import db
from models.item import Item
from models.order import Order, OrderItem, PAYMENT_TYPES
from app.exceptions import NotFoundError, StateError, ValidationError
from app.utils.text import folded_contains
from app.services.clock import local_range_to_utc

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "customer_name": Order.customer_name,
    "date": Order.created_at,
}


@dataclass(frozen=True)
class OrderLineSnapshot:
    """Historical copy of a line; never refreshed from the catalog."""

    item_id: Optional[int]
    item_name_at_time: str
    price_at_time: Decimal
    quantity: int
    item_category_at_time: Optional[str]

    @property
    def subtotal(self) -> Decimal:
        return self.price_at_time * self.quantity


def _clean_customer_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Customer name is required")
    return name


def _snapshot_lines(lines) -> List[OrderLineSnapshot]:
    if not lines:
        raise ValidationError("At least one item is required")
    snapshots = []
    for idx, line in enumerate(lines, start=1):
        name = (line.name or "").strip()
        if not name:
            raise ValidationError(f"Line {idx}: item name is required")
        if line.quantity is None or line.quantity <= 0:
            raise ValidationError(f"Line {idx}: quantity must be greater than zero")
        if line.price is None:
            raise ValidationError(f"Line {idx}: price is required")
        if line.price < 0:
            raise ValidationError(f"Line {idx}: price must be non-negative")
        category = line.category
        if line.item_id is not None:
            item = db.session.get(Item, line.item_id)
            if item is None:
                raise ValidationError(f"Line {idx}: unknown item {line.item_id}")
            category = item.category.name if item.category else category
        snapshots.append(
            OrderLineSnapshot(
                item_id=line.item_id,
                item_name_at_time=name,
                price_at_time=Decimal(line.price),
                quantity=line.quantity,
                item_category_at_time=category or "Unknown",
            )
        )
    return snapshots


def compute_total(snapshots: List[OrderLineSnapshot]) -> Decimal:
    return sum((s.subtotal for s in snapshots), Decimal("0"))


def _write_lines(order: Order, snapshots: List[OrderLineSnapshot]) -> None:
    for s in snapshots:
        order.items.append(
            OrderItem(
                item_id=s.item_id,
                quantity=s.quantity,
                price_at_time=s.price_at_time,
                item_name_at_time=s.item_name_at_time,
                item_category_at_time=s.item_category_at_time,
            )
        )
    order.total_cost = compute_total(snapshots)


def get_order(order_id: int) -> Order:
    order = db.session.get(Order, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


def create_order(customer_name: str, lines) -> Order:
    name = _clean_customer_name(customer_name)
    snapshots = _snapshot_lines(lines)
    order = Order(customer_name=name, is_paid=False, payment_type=None)
    _write_lines(order, snapshots)
    db.session.add(order)
    db.session.flush()
    logger.info({"event": "order_created", "order_id": order.id, "lines": len(snapshots)})
    return order


def edit_order(order_id: int, lines, customer_name: Optional[str] = None) -> Order:
    """Replace every line of an unpaid order and recompute its total."""
    order = get_order(order_id)
    if order.is_paid:
        raise StateError("Cannot edit a paid order")
    name = _clean_customer_name(customer_name) if customer_name is not None else None
    snapshots = _snapshot_lines(lines)

    order.items.clear()
    db.session.flush()
    _write_lines(order, snapshots)
    if name:
        order.customer_name = name
    db.session.flush()
    logger.info({"event": "order_edited", "order_id": order.id, "lines": len(snapshots)})
    return order


def set_payment_status(order_id: int, is_paid: bool, payment_type: Optional[str] = None) -> Order:
    order = get_order(order_id)
    if is_paid:
        if not payment_type:
            raise StateError("Payment type is required when marking as paid")
        if payment_type not in PAYMENT_TYPES:
            raise ValidationError(
                f"Invalid payment type. Must be one of: {', '.join(PAYMENT_TYPES)}"
            )
        order.is_paid = True
        order.payment_type = payment_type
    else:
        # Payment method is dropped, not archived
        order.is_paid = False
        order.payment_type = None
    return order


def delete_order(order_id: int) -> None:
    order = get_order(order_id)
    # Lines go with the order through the delete-orphan cascade
    db.session.delete(order)


# --- Listing ---

@dataclass
class OrderQuery:
    page: int = 1
    limit: int = 20
    unpaid_only: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: str = "date"
    sort_order: str = "desc"
    customer_name: Optional[str] = None


def list_orders(params: OrderQuery, tz_name: str = "UTC") -> dict:
    if params.page < 1:
        raise ValidationError("page must be at least 1")
    if params.limit < 1:
        raise ValidationError("limit must be at least 1")
    if params.sort_by not in SORT_COLUMNS:
        raise ValidationError("sortBy must be one of: customer_name, date")
    if params.sort_order not in ("asc", "desc"):
        raise ValidationError("sortOrder must be asc or desc")

    q = Order.query
    if params.unpaid_only:
        q = q.filter(Order.is_paid.is_(False))
    if params.start_date or params.end_date:
        start = datetime.combine(params.start_date, time.min) if params.start_date else None
        end = (
            datetime.combine(params.end_date + timedelta(days=1), time.min)
            if params.end_date else None
        )
        start_utc, end_utc = local_range_to_utc(start, end, tz_name)
        if start_utc is not None:
            q = q.filter(Order.created_at >= start_utc)
        if end_utc is not None:
            q = q.filter(Order.created_at < end_utc)

    column = SORT_COLUMNS[params.sort_by]
    ordering = column.asc() if params.sort_order == "asc" else column.desc()
    q = q.order_by(ordering, Order.id.asc() if params.sort_order == "asc" else Order.id.desc())

    offset = (params.page - 1) * params.limit
    if params.customer_name:
        # Folded match runs in Python; paginate the matches
        matches = [o for o in q.all() if folded_contains(o.customer_name, params.customer_name)]
        total = len(matches)
        orders = matches[offset:offset + params.limit]
    else:
        total = q.count()
        orders = q.offset(offset).limit(params.limit).all()

    return {
        "orders": [o.to_dict() for o in orders],
        "pagination": {
            "page": params.page,
            "limit": params.limit,
            "total": total,
            "totalPages": math.ceil(total / params.limit) if total else 0,
        },
    }
