from datetime import date
from flask import Blueprint, current_app, request
from app.version import API_PREFIX
from app.schemas.orders import OrderCreateRequest, OrderEditRequest, PaymentStatusRequest
from app.services import order_service
from app.services.order_service import OrderQuery
from app.exceptions import ValidationError
from app.metrics import ORDERS_CREATED
from app.utils import ok, permission_required, query_int, transactional, validate_schema

order_bp = Blueprint("order", __name__, url_prefix=API_PREFIX)


def _query_date(name):
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise ValidationError(f"{name} must be an ISO date (YYYY-MM-DD)")


def _order_query() -> OrderQuery:
    cfg = current_app.config
    limit = query_int("limit", cfg["ORDERS_PAGE_SIZE"])
    sort_by = request.args.get("sortBy", "date")
    return OrderQuery(
        page=query_int("page", 1),
        limit=min(limit, cfg["ORDERS_MAX_PAGE_SIZE"]),
        unpaid_only=request.args.get("filter") == "unpaid",
        start_date=_query_date("startDate"),
        end_date=_query_date("endDate"),
        sort_by="date" if sort_by == "created_at" else sort_by,
        sort_order=request.args.get("sortOrder", "desc").lower(),
        customer_name=(request.args.get("customerName") or "").strip() or None,
    )


@order_bp.route("/orders", methods=["GET"])
@permission_required
def list_orders():
    order_id = query_int("id")
    if order_id is not None:
        return ok(order_service.get_order(order_id).to_dict())
    result = order_service.list_orders(_order_query(), current_app.config["APP_TIMEZONE"])
    return ok(result)


@order_bp.route("/orders", methods=["POST"])
@permission_required
@validate_schema(OrderCreateRequest)
def create_order():
    data = request.validated_data
    with transactional("Failed to create order"):
        order = order_service.create_order(data.customer_name, data.items)
    ORDERS_CREATED.inc()
    return ok(order.to_dict(), message="Order created", status=201)


@order_bp.route("/orders", methods=["PATCH"])
@permission_required
@validate_schema(OrderEditRequest)
def edit_order():
    data = request.validated_data
    with transactional("Failed to update order"):
        order = order_service.edit_order(data.id, data.items, data.customer_name)
    return ok(order.to_dict(), message="Order updated")


@order_bp.route("/orders", methods=["PUT"])
@permission_required
@validate_schema(PaymentStatusRequest)
def update_payment_status():
    data = request.validated_data
    with transactional("Failed to update payment status"):
        order = order_service.set_payment_status(data.id, data.is_paid, data.payment_type)
    return ok(order.to_dict(), message="Payment status updated")


@order_bp.route("/orders", methods=["DELETE"])
@permission_required
def delete_order():
    order_id = query_int("id")
    if order_id is None:
        raise ValidationError("Order ID is required")
    with transactional("Failed to delete order"):
        order_service.delete_order(order_id)
    return ok(message="Order deleted")
