from pydantic import BaseModel, EmailStr, field_validator, ConfigDict
from typing import Optional
from datetime import datetime

from app.core.constants import UserRoleEnum

class UserBase(BaseModel):
    """Base user schema with common fields."""
    full_name: str
    email: EmailStr

class UserCreate(UserBase):
    """Schema for creating a new user, includes password."""
    password: str

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

    @field_validator("full_name")
    def not_empty(cls, v):
        if not v.strip():
            raise ValueError("Full name cannot be empty")
        return v.strip()

class User(UserBase):
    """Main user schema for reading user data."""
    id: int
    is_active: bool
    is_admin: bool
    role: UserRoleEnum
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class UserRoleUpdate(BaseModel):
    user_id: int
    role: UserRoleEnum
