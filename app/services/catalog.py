from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func

from models import db
from models.item import Category, Item
from models.order import OrderItem
from app.exceptions import NotFoundError, StateError, ValidationError


# --- Categories ---

def _clean_category_name(name: str, exclude_id: int = None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required")
    q = Category.query.filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        q = q.filter(Category.id != exclude_id)
    if q.first():
        raise ValidationError(f"Category '{name}' already exists")
    return name


def get_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category


def list_categories() -> List[dict]:
    counts = dict(
        db.session.query(Item.category_id, func.count(Item.id))
        .group_by(Item.category_id)
        .all()
    )
    return [
        {**c.to_dict(), "item_count": counts.get(c.id, 0)}
        for c in Category.query.order_by(Category.name.asc()).all()
    ]


def create_category(name: str) -> Category:
    category = Category(name=_clean_category_name(name))
    db.session.add(category)
    db.session.flush()
    return category


def rename_category(category_id: int, name: str) -> Category:
    category = get_category(category_id)
    category.name = _clean_category_name(name, exclude_id=category.id)
    return category


def delete_category(category_id: int) -> None:
    category = get_category(category_id)
    in_use = Item.query.filter_by(category_id=category.id).count()
    if in_use:
        raise StateError(
            f"Cannot delete category '{category.name}': {in_use} item(s) still use it"
        )
    db.session.delete(category)


# --- Items ---

def _check_price(has_custom_price: bool, price: Optional[Decimal]) -> Optional[Decimal]:
    if has_custom_price:
        if price is not None:
            raise ValidationError("Custom-price items must not have a fixed price")
        return None
    if price is None:
        raise ValidationError("Price is required for items without a custom price")
    if price < 0:
        raise ValidationError("Price must be non-negative")
    return price


def get_item(item_id: int) -> Item:
    item = db.session.get(Item, item_id)
    if not item:
        raise NotFoundError("Item not found")
    return item


def list_items(active: Optional[bool] = None, category_id: Optional[int] = None) -> List[Item]:
    q = Item.query
    if active is not None:
        q = q.filter(Item.is_active.is_(active))
    if category_id is not None:
        q = q.filter(Item.category_id == category_id)
    return q.order_by(Item.created_at.desc(), Item.id.desc()).all()


def create_item(data) -> Item:
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Item name is required")
    get_category(data.category_id)
    item = Item(
        name=name,
        category_id=data.category_id,
        has_custom_price=data.has_custom_price,
        price=_check_price(data.has_custom_price, data.price),
        image_url=data.image_url,
        is_active=data.is_active,
    )
    db.session.add(item)
    db.session.flush()
    return item


def update_item(data) -> Item:
    """Apply a full edit, or only flip ``is_active`` when that is all that was sent."""
    item = get_item(data.id)
    if "is_active" in data.model_fields_set and data.is_active is None:
        raise ValidationError("is_active must be true or false")
    if data.is_activation_toggle():
        item.is_active = data.is_active
        return item

    fields = data.model_fields_set
    if "name" in fields:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Item name is required")
        item.name = name
    if data.category_id is not None:
        item.category_id = get_category(data.category_id).id

    has_custom_price = item.has_custom_price if data.has_custom_price is None else data.has_custom_price
    price = data.price if "price" in fields else (None if has_custom_price else item.price)
    item.price = _check_price(has_custom_price, price)
    item.has_custom_price = has_custom_price

    if "image_url" in fields:
        item.image_url = data.image_url
    if data.is_active is not None:
        item.is_active = data.is_active
    return item


def delete_item(item_id: int) -> None:
    item = get_item(item_id)
    # Order lines keep their snapshot fields
    OrderItem.query.filter_by(item_id=item.id).update(
        {OrderItem.item_id: None}, synchronize_session=False
    )
    db.session.delete(item)
