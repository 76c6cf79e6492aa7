"""
SiteCMS Backend: Service & Team Schemas
========================================

What:  Pydantic models for the services and team collections.

Every field is optional on write: an omitted field is stored as NULL,
both on create and on update (update overwrites all editable fields).
"""

from typing import Optional

from pydantic import BaseModel, Field


class ServicePayload(BaseModel):
    """Body of POST /api/services and PUT /api/services/{id}."""
    title: Optional[str] = Field(default=None, description="Service title")
    description: Optional[str] = Field(default=None, description="Short description")
    icon: Optional[str] = Field(default=None, description="Client-side icon name")
    file_url: Optional[str] = Field(
        default=None,
        description="URL returned by POST /api/upload (e.g. /uploads/1700000000000-42.pdf)",
    )


class ServiceRead(ServicePayload):
    id: int

    model_config = {"from_attributes": True}


class TeamMemberPayload(BaseModel):
    """Body of POST /api/team and PUT /api/team/{id}."""
    name: Optional[str] = Field(default=None, description="Member name")
    title: Optional[str] = Field(default=None, description="Job title")
    image: Optional[str] = Field(default=None, description="Portrait URL")
    icon: Optional[str] = Field(default=None, description="Client-side icon name")


class TeamMemberRead(TeamMemberPayload):
    id: int

    model_config = {"from_attributes": True}
