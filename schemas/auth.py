from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Optional so a missing field yields 400 from the handler, not a validation error.
    email: Optional[str] = None
    password: Optional[str] = None


class UserSchema(BaseModel):
    id: int
    name: str
    email: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserSchema
