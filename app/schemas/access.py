from typing import Literal, Optional
from pydantic import BaseModel, constr
from .auth import EMAIL_PATTERN

Role = Literal["member", "admin"]


class AccessRequestCreate(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN)
    full_name: constr(strip_whitespace=True, min_length=1, max_length=150)
    reason: Optional[str] = None


class ReviewAccessRequest(BaseModel):
    requestId: int
    action: Literal["approve", "reject"]
    adminNotes: Optional[str] = None


class UserCreateRequest(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN)
    role: Role = "member"
    orders_permission: bool = False


class UserUpdateRequest(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN)
    orders_permission: Optional[bool] = None
    role: Optional[Role] = None
