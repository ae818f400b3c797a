"""Account update log repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.update import AccountUpdate


class IUpdateRepository(Protocol):
    """Repository interface for per-account update logs."""

    async def next_pts(self, account_id: UUID) -> int:
        """Reserve the next sequence number for an account."""
        ...

    async def create(self, update: AccountUpdate) -> AccountUpdate:
        """Append an update to the account's log."""
        ...

    async def get_after(
        self, account_id: UUID, after_pts: int, limit: int = 100
    ) -> list[AccountUpdate]:
        """Get updates with ``pts > after_pts``, oldest first."""
        ...

    async def get_state(self, account_id: UUID) -> int:
        """Get the latest sequence number of an account (0 if none)."""
        ...
