"""Pydantic schemas for the Account API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ProfileUpdate(BaseModel):
    """Schema for ``account.updateProfile``.

    Omitted fields are left untouched; first and last name travel together.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Ann",
                "last_name": "Lee",
                "about": "Hiking and tea",
            }
        },
    )

    first_name: str | None = None
    last_name: str | None = None
    about: str | None = None


class ProfileResponse(BaseModel):
    """Schema for the account's self-view."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    username: str | None = None
    about: str
    phone: str | None = None
    is_self: bool = True


class ProfileDetailResponse(BaseModel):
    """Schema for single profile."""

    data: ProfileResponse
