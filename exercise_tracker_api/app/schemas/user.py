"""
Pydantic models for user data.

Users carry nothing but a generated id and a free-form username.  The
id travels over the wire as ``_id``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user.  Neither emptiness nor uniqueness is checked."""

    username: Optional[str] = Field(None, description="Display name of the user")


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str = Field(..., alias="_id")
    username: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }
