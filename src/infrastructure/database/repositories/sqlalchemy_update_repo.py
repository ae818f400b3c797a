"""SQLAlchemy implementation of the account update log repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.update import AccountUpdate
from infrastructure.database.models import AccountUpdateModel


class SQLAlchemyUpdateRepository:
    """SQLAlchemy implementation of IUpdateRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def next_pts(self, account_id: UUID) -> int:
        """Reserve the next pts; uq_account_updates_account_pts rejects duplicates."""
        return await self.get_state(account_id) + 1

    async def create(self, update: AccountUpdate) -> AccountUpdate:
        """Append an update to the account's log."""
        model = self._to_model(update)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_after(
        self, account_id: UUID, after_pts: int, limit: int = 100
    ) -> list[AccountUpdate]:
        """Get updates with pts greater than ``after_pts``, oldest first."""
        stmt = (
            select(AccountUpdateModel)
            .where(
                AccountUpdateModel.account_id == account_id,
                AccountUpdateModel.pts > after_pts,
            )
            .order_by(AccountUpdateModel.pts)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_state(self, account_id: UUID) -> int:
        """Get the latest pts of an account."""
        stmt = select(func.max(AccountUpdateModel.pts)).where(
            AccountUpdateModel.account_id == account_id
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    def _to_entity(self, model: AccountUpdateModel) -> AccountUpdate:
        """Convert ORM model to domain entity."""
        return AccountUpdate(
            id=model.id,
            account_id=model.account_id,
            pts=model.pts,
            type_name=model.type_name,
            payload=model.payload or {},
            exclude_session_key=model.exclude_session_key,
            created_at=model.created_at,
        )

    def _to_model(self, entity: AccountUpdate) -> AccountUpdateModel:
        """Convert domain entity to ORM model."""
        return AccountUpdateModel(
            id=entity.id,
            account_id=entity.account_id,
            pts=entity.pts,
            type_name=entity.type_name,
            payload=entity.payload,
            exclude_session_key=entity.exclude_session_key,
            created_at=entity.created_at,
        )
