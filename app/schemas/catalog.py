from typing import Optional
from pydantic import BaseModel, constr
from .orders import Price

CategoryName = constr(max_length=100)
ItemName = constr(max_length=100)
ImageUrl = constr(max_length=255)


class CategoryCreateRequest(BaseModel):
    name: CategoryName = ""


class CategoryUpdateRequest(BaseModel):
    id: int
    name: CategoryName = ""


class ItemCreateRequest(BaseModel):
    name: ItemName = ""
    category_id: int
    price: Optional[Price] = None
    has_custom_price: bool = False
    image_url: Optional[ImageUrl] = None
    is_active: bool = True


class ItemUpdateRequest(BaseModel):
    id: int
    name: Optional[ItemName] = None
    category_id: Optional[int] = None
    price: Optional[Price] = None
    has_custom_price: Optional[bool] = None
    image_url: Optional[ImageUrl] = None
    is_active: Optional[bool] = None

    def is_activation_toggle(self) -> bool:
        return self.model_fields_set - {"id"} == {"is_active"}
