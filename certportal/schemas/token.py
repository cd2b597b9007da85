# certportal/schemas/token.py
from pydantic import BaseModel, Field

from certportal.schemas.user import UserPublic


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
