from typing import List, Optional
from pydantic import BaseModel, ConfigDict, condecimal, constr

# Same precision as the Numeric(10, 2) price columns
Price = condecimal(max_digits=10, decimal_places=2)


class OrderLineRequest(BaseModel):
    """One requested line; price is the value the cashier submitted."""

    item_id: Optional[int] = None
    name: constr(max_length=255) = ""
    price: Optional[Price] = None
    quantity: int
    category: Optional[constr(max_length=100)] = None


class OrderCreateRequest(BaseModel):
    # Client-side totals are ignored
    model_config = ConfigDict(extra="ignore")

    customer_name: constr(max_length=150) = ""
    items: List[OrderLineRequest] = []


class OrderEditRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    items: List[OrderLineRequest] = []
    customer_name: Optional[constr(max_length=150)] = None


class PaymentStatusRequest(BaseModel):
    id: int
    is_paid: bool
    payment_type: Optional[str] = None
