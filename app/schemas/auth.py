from pydantic import BaseModel, constr

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN)
    password: constr(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
