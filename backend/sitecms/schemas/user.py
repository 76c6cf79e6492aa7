"""
SiteCMS Backend: User & Login Schemas
======================================

What:  Pydantic models for the login and user-management endpoints.
Who:   Used by routes/auth.py and routes/users.py.

The password never appears in any response model: list, create and login
all return `UserPublic`.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    username: str = Field(description="Account username (exact match)")
    password: str = Field(description="Account password (exact match)")


class UserCreate(BaseModel):
    """
    Body of POST /api/users.

    role: Optional; an absent or empty role is stored as "editor".
    """
    username: str = Field(description="Unique username")
    password: str = Field(description="Password, stored as given")
    name: Optional[str] = Field(default=None, description="Display name")
    role: Optional[str] = Field(default=None, description="'admin' or 'editor'")


class UserUpdate(BaseModel):
    """
    Body of PUT /api/users/{id}.

    password: Optional; when absent or empty the stored password is kept.
    """
    username: str = Field(description="New username (must stay unique)")
    password: Optional[str] = Field(default=None, description="New password, if changing")
    name: Optional[str] = Field(default=None, description="Display name")
    role: Optional[str] = Field(default=None, description="'admin' or 'editor'")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserPublic(BaseModel):
    id: int
    username: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool = True
    user: UserPublic


UserList = List[UserPublic]
