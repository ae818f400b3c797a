"""Session domain entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Routing metadata of the session that issued a request."""

    user_id: UUID
    session_key: str
    layer: int | None = None
