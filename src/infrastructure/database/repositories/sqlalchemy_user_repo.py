"""SQLAlchemy implementation of the user directory repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import UserSnapshot
from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_immutable_user(self, user_id: UUID) -> UserSnapshot | None:
        """Get a point-in-time snapshot of a user."""
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update_first_and_last_name(
        self,
        user_id: UUID,
        first_name: str,
        last_name: str,
        expected_first_name: str,
        expected_last_name: str,
    ) -> bool:
        """Compare-and-set both names in one statement."""
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.first_name == expected_first_name,
                UserModel.last_name == expected_last_name,
            )
            .values(first_name=first_name, last_name=last_name)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def update_about(self, user_id: UUID, about: str, expected_about: str) -> bool:
        """Compare-and-set the biography in one statement."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.about == expected_about)
            .values(about=about)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _to_entity(self, model: UserModel) -> UserSnapshot:
        """Convert ORM model to domain entity."""
        return UserSnapshot(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            username=model.username,
            about=model.about,
            phone=model.phone,
            updated_at=model.updated_at,
        )
