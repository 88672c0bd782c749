from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.catalog import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    ItemCreateRequest,
    ItemUpdateRequest,
)
from app.services import catalog, storage
from app.exceptions import ValidationError
from app.utils import ok, permission_required, query_bool, query_int, transactional, validate_schema

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)


def _required_id():
    item_id = query_int("id")
    if item_id is None:
        raise ValidationError("id is required")
    return item_id


# --- Categories ---

@catalog_bp.route("/categories", methods=["GET"])
@permission_required
def list_categories():
    return ok(catalog.list_categories())


@catalog_bp.route("/categories", methods=["POST"])
@permission_required
@validate_schema(CategoryCreateRequest)
def create_category():
    data = request.validated_data
    with transactional("Failed to create category"):
        category = catalog.create_category(data.name)
    return ok(category.to_dict(), message="Category created", status=201)


@catalog_bp.route("/categories", methods=["PUT"])
@permission_required
@validate_schema(CategoryUpdateRequest)
def rename_category():
    data = request.validated_data
    with transactional("Failed to update category"):
        category = catalog.rename_category(data.id, data.name)
    return ok(category.to_dict(), message="Category updated")


@catalog_bp.route("/categories", methods=["DELETE"])
@permission_required
def delete_category():
    category_id = _required_id()
    with transactional("Failed to delete category"):
        catalog.delete_category(category_id)
    return ok(message="Category deleted")


# --- Items ---

@catalog_bp.route("/items", methods=["GET"])
@permission_required
def list_items():
    item_id = query_int("id")
    if item_id is not None:
        return ok(catalog.get_item(item_id).to_dict())
    items = catalog.list_items(
        active=query_bool("active"),
        category_id=query_int("category_id"),
    )
    return ok([i.to_dict() for i in items])


@catalog_bp.route("/items", methods=["POST"])
@permission_required
@validate_schema(ItemCreateRequest)
def create_item():
    with transactional("Failed to add item"):
        item = catalog.create_item(request.validated_data)
    return ok(item.to_dict(), message="Item added", status=201)


@catalog_bp.route("/items", methods=["PUT"])
@permission_required
@validate_schema(ItemUpdateRequest)
def update_item():
    data = request.validated_data
    with transactional("Failed to update item"):
        item = catalog.update_item(data)
    message = "Item availability updated" if data.is_activation_toggle() else "Item updated"
    return ok(item.to_dict(), message=message)


@catalog_bp.route("/items", methods=["DELETE"])
@permission_required
def delete_item():
    item_id = _required_id()
    with transactional("Failed to delete item"):
        catalog.delete_item(item_id)
    return ok(message="Item deleted")


@catalog_bp.route("/items/image", methods=["POST"])
@permission_required
def upload_item_image():
    url = storage.save_item_image(request.files.get("file"))
    return ok({"url": url}, message="Image uploaded", status=201)
