"""User directory domain entities."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PublicProfile:
    """Read-only value object: the account's self-view returned to clients."""

    id: UUID
    first_name: str
    last_name: str
    username: str | None
    about: str
    phone: str | None = None
    is_self: bool = True


@dataclass(frozen=True, slots=True)
class UserSnapshot:
    """Immutable point-in-time read of a user's profile fields.

    Writes never touch a snapshot; after a successful write the caller
    derives a new value with ``with_names``/``with_about``.
    """

    id: UUID
    first_name: str = ""
    last_name: str = ""
    username: str | None = None
    about: str = ""
    phone: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def names_match(self, first_name: str, last_name: str) -> bool:
        return self.first_name == first_name and self.last_name == last_name

    def with_names(self, first_name: str, last_name: str) -> "UserSnapshot":
        return replace(self, first_name=first_name, last_name=last_name)

    def with_about(self, about: str) -> "UserSnapshot":
        return replace(self, about=about)

    def to_self_profile(self) -> PublicProfile:
        """Build the self-view of this snapshot."""
        return PublicProfile(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            username=self.username,
            about=self.about,
            phone=self.phone,
        )


@dataclass(frozen=True, slots=True)
class ProfileUpdateRequest:
    """Requested profile changes; ``None`` means the field was not supplied."""

    first_name: str | None = None
    last_name: str | None = None
    about: str | None = None

    @property
    def has_names(self) -> bool:
        return self.first_name is not None or self.last_name is not None

    @property
    def has_about(self) -> bool:
        return self.about is not None
