"""Sales report aggregation.

Reports are rebuilt from the order tables on every call. A single pass over
the orders in scope fills every bucket, and all maps are emitted with sorted
keys so the same data always renders the same JSON.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import selectinload

from models.item import Item
from models.order import Order, OrderItem
from app.exceptions import ValidationError
from app.services.clock import local_date, month_window

UNKNOWN = "Unknown"
CENTS = Decimal("0.01")


def _money(value: Decimal) -> float:
    return float(Decimal(value).quantize(CENTS))


def _bucket():
    return {"total": Decimal("0"), "count": 0}


def _render(buckets: dict) -> dict:
    return {
        key: {"total": _money(b["total"]), "count": b["count"]}
        for key, b in sorted(buckets.items())
    }


def validate_period(month: Optional[int], year: Optional[int]):
    if month is None and year is None:
        return None
    if month is None or year is None:
        raise ValidationError("month and year must be provided together")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1970 <= year <= 9998:
        raise ValidationError("year is out of range")
    return month, year


def _orders_in_scope(month, year, tz_name):
    q = Order.query.options(
        selectinload(Order.items).selectinload(OrderItem.item).selectinload(Item.category)
    )
    if month is not None:
        start, end = month_window(month, year, tz_name)
        q = q.filter(Order.created_at >= start, Order.created_at < end)
    return q.order_by(Order.created_at.desc(), Order.id.desc()).all()


def _line_category(line: OrderItem) -> str:
    # Live category of the item; the snapshot only covers deleted items
    if line.item is not None and line.item.category is not None:
        return line.item.category.name
    return line.item_category_at_time or UNKNOWN


def build_report(month: Optional[int] = None, year: Optional[int] = None, tz_name: str = "UTC") -> dict:
    period = validate_period(month, year)
    orders = _orders_in_scope(*(period or (None, None)), tz_name)

    by_date = defaultdict(_bucket)
    by_category = defaultdict(_bucket)
    by_payment_type = {"Paid": _bucket(), "Unpaid": _bucket()}
    by_payment_method = defaultdict(_bucket)
    items_by_date = defaultdict(lambda: defaultdict(lambda: {"quantity": 0, "revenue": Decimal("0")}))

    total_revenue = Decimal("0")
    paid_orders = 0

    for order in orders:
        total = Decimal(order.total_cost or 0)
        day = local_date(order.created_at, tz_name).isoformat()
        total_revenue += total

        by_date[day]["total"] += total
        by_date[day]["count"] += 1

        if order.is_paid:
            paid_orders += 1
            bucket = by_payment_type["Paid"]
            method = by_payment_method[order.payment_type or UNKNOWN]
            method["total"] += total
            method["count"] += 1
        else:
            bucket = by_payment_type["Unpaid"]
        bucket["total"] += total
        bucket["count"] += 1

        for line in order.items:
            revenue = Decimal(line.price_at_time) * line.quantity
            cat = by_category[_line_category(line)]
            cat["total"] += revenue
            cat["count"] += line.quantity

            sold = items_by_date[day][line.item_name_at_time]
            sold["quantity"] += line.quantity
            sold["revenue"] += revenue

    return {
        "period": {"month": period[0], "year": period[1]} if period else None,
        "summary": {
            "totalRevenue": _money(total_revenue),
            "totalOrders": len(orders),
            "paidOrders": paid_orders,
            "unpaidOrders": len(orders) - paid_orders,
        },
        "byDate": _render(by_date),
        "byCategory": _render(by_category),
        "byPaymentType": _render(by_payment_type),
        "byPaymentMethod": _render(by_payment_method),
        "itemsByDate": {
            day: {
                name: {"quantity": v["quantity"], "revenue": _money(v["revenue"])}
                for name, v in sorted(names.items())
            }
            for day, names in sorted(items_by_date.items())
        },
    }
