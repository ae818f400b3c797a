"""Update service layer: fan-out of account changes to other sessions."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import NotificationFailedError
from domain.entities.update import AccountUpdate, UpdatesDifference, UserNameUpdate
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DIFFERENCE_LIMIT_MAX = 100
PTS_ALLOCATION_ATTEMPTS = 5


class UpdateService:
    """Service layer for dispatching and reading account updates."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def notify_name_changed(
        self,
        account_id: UUID,
        origin_session_key: str,
        first_name: str,
        last_name: str,
        username: str | None,
        uow: IUnitOfWork | None = None,
    ) -> AccountUpdate:
        """Send an ``updateUserName`` to every session of the account but the origin.

        The update is appended to the account's update log in its own
        transaction, tagged so the originating session never receives it.
        A pts taken by a concurrent append is re-allocated and retried.

        Args:
            account_id: The account whose name changed.
            origin_session_key: Session that made the change (excluded).
            first_name: The new first name.
            last_name: The new last name.
            username: The account's current username.
            uow: Open unit of work to append through. Opens its own if omitted.

        Returns:
            The stored AccountUpdate.

        Raises:
            NotificationFailedError: If the update could not be stored.
        """
        event = UserNameUpdate(
            user_id=account_id,
            first_name=first_name,
            last_name=last_name,
            username=username,
        )

        try:
            if uow is not None:
                created = await self._append(uow, event, account_id, origin_session_key)
            else:
                async with self._uow_factory() as own_uow:
                    created = await self._append(own_uow, event, account_id, origin_session_key)
        except SQLAlchemyError as exc:
            logger.error(
                "update_dispatch_failed",
                account_id=str(account_id),
                update_type=event.type_name,
                error=str(exc),
            )
            raise NotificationFailedError(str(account_id), event.type_name) from exc

        logger.info(
            "update_dispatched",
            account_id=str(account_id),
            update_type=event.type_name,
            pts=created.pts,
        )
        return created

    async def get_difference(
        self,
        account_id: UUID,
        session_key: str,
        after_pts: int = 0,
        limit: int = 50,
    ) -> UpdatesDifference:
        """Get updates newer than ``after_pts`` that this session should see.

        Updates originating from ``session_key`` are skipped but still
        advance the returned state.
        """
        limit = max(1, min(limit, DIFFERENCE_LIMIT_MAX))
        async with self._uow_factory() as uow:
            updates = await uow.updates.get_after(account_id, after_pts, limit)
            state_pts = await uow.updates.get_state(account_id)

        # A full page may not reach the latest pts; resume after the last one
        if len(updates) == limit:
            state_pts = updates[-1].pts

        visible = [u for u in updates if u.exclude_session_key != session_key]
        return UpdatesDifference(updates=visible, state_pts=state_pts)

    # --- Helpers ---

    async def _append(
        self,
        uow: IUnitOfWork,
        event: UserNameUpdate,
        account_id: UUID,
        origin_session_key: str,
    ) -> AccountUpdate:
        attempt = 1
        while True:
            pts = await uow.updates.next_pts(account_id)
            try:
                created = await uow.updates.create(
                    AccountUpdate(
                        account_id=account_id,
                        pts=pts,
                        type_name=event.type_name,
                        payload=event.to_payload(),
                        exclude_session_key=origin_session_key,
                    )
                )
                await uow.commit()
                return created
            except IntegrityError:
                # Another append took this pts first
                await uow.rollback()
                if attempt == PTS_ALLOCATION_ATTEMPTS:
                    raise
                logger.warning(
                    "update_pts_collision",
                    account_id=str(account_id),
                    pts=pts,
                    attempt=attempt,
                )
                attempt += 1
