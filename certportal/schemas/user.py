# certportal/schemas/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from certportal.api.permissions import Role


class AdminCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = Role.ADMIN


class AdminUpdate(BaseModel):
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[Role] = None


class UserPublic(BaseModel):
    """Perfil exposto ao front; nunca inclui o hash da senha."""
    id: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class AdminOut(UserPublic):
    created_at: datetime
