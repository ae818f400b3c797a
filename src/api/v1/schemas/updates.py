"""Pydantic schemas for the Updates API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UpdateResponse(BaseModel):
    """Schema for a single account update."""

    model_config = ConfigDict(from_attributes=True)

    pts: int
    type_name: str
    payload: dict[str, Any]
    created_at: datetime


class UpdatesDifferenceResponse(BaseModel):
    """Schema for updates a session has not seen yet."""

    account_id: UUID
    updates: list[UpdateResponse]
    state_pts: int
