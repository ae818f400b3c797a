"""Account update (sync) domain entities and type constants."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


class UpdateTypes:
    """Update type constants, named after the client-facing constructors."""

    USER_NAME = "updateUserName"


@dataclass(frozen=True, slots=True)
class UserNameUpdate:
    """Update event: a user's first/last name changed."""

    user_id: UUID
    first_name: str
    last_name: str
    username: str | None = None

    @property
    def type_name(self) -> str:
        return UpdateTypes.USER_NAME

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_id": str(self.user_id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "username": self.username,
        }


@dataclass
class AccountUpdate:
    """Domain entity for an update stored in an account's update log.

    ``pts`` is the per-account sequence number. Sessions whose key equals
    ``exclude_session_key`` never receive the update.
    """

    account_id: UUID
    pts: int
    type_name: str
    payload: dict[str, Any]
    id: UUID = field(default_factory=uuid4)
    exclude_session_key: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class UpdatesDifference:
    """Read-only value object: updates a session has not seen yet."""

    updates: list[AccountUpdate]
    state_pts: int
