"""User directory repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import UserSnapshot


class IUserRepository(Protocol):
    """Repository interface for the authoritative user directory."""

    async def get_immutable_user(self, user_id: UUID) -> UserSnapshot | None:
        """Get a point-in-time snapshot of a user."""
        ...

    async def update_first_and_last_name(
        self,
        user_id: UUID,
        first_name: str,
        last_name: str,
        expected_first_name: str,
        expected_last_name: str,
    ) -> bool:
        """Set both names if the stored pair still equals the expected one.

        Returns False when the row was changed by someone else.
        """
        ...

    async def update_about(self, user_id: UUID, about: str, expected_about: str) -> bool:
        """Set the biography if the stored one still equals ``expected_about``."""
        ...
