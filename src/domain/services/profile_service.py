"""Profile service layer: the ``account.updateProfile`` command."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import (
    AboutTooLongError,
    DownstreamWriteFailedError,
    InvalidFirstNameError,
    ProfileConflictError,
    UserLookupFailedError,
    UserNotFoundError,
)
from domain.entities.session import SessionContext
from domain.entities.user import ProfileUpdateRequest, PublicProfile, UserSnapshot
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.update_service import UpdateService

logger = structlog.get_logger()

ABOUT_MAX_LENGTH = 70
NAME_MAX_LENGTH = 64


class ProfileService:
    """Service layer for reading and updating the acting user's profile."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        update_service: UpdateService,
        about_max_length: int = ABOUT_MAX_LENGTH,
    ) -> None:
        self._uow_factory = uow_factory
        self._updates = update_service
        self._about_max_length = about_max_length

    async def get_self(self, user_id: UUID) -> PublicProfile:
        """Get the self-view of a user."""
        async with self._uow_factory() as uow:
            me = await self._get_snapshot(uow, user_id)
        return me.to_self_profile()

    async def update_profile(
        self,
        request: ProfileUpdateRequest,
        acting_user_id: UUID,
        session: SessionContext,
    ) -> PublicProfile:
        """Apply a profile update for the acting user.

        Only fields that differ from the stored snapshot are written, so
        re-submitting the same request performs no write and sends no
        update. A name change is followed by an ``updateUserName`` to the
        account's other sessions. Both field groups are validated before
        anything is written.

        Args:
            request: Optional first/last name pair and optional about.
            acting_user_id: Whose profile is modified.
            session: The session issuing the request (excluded from the update).

        Returns:
            The self-view after the operation.

        Raises:
            UserNotFoundError / UserLookupFailedError: Snapshot unavailable.
            InvalidFirstNameError: Names not paired, or a name is empty or too long.
            AboutTooLongError: About exceeds the allowed length.
            ProfileConflictError: The stored value changed after the snapshot.
            DownstreamWriteFailedError: A directory write failed.
            NotificationFailedError: The update could not be dispatched.
        """
        async with self._uow_factory() as uow:
            me = await self._get_snapshot(uow, acting_user_id)

            names = self._validate_names(request) if request.has_names else None
            if request.about is not None:
                self._validate_about(request.about)

            if names is not None:
                me = await self._apply_names(uow, me, names[0], names[1], session)
            if request.about is not None:
                me = await self._apply_about(uow, me, request.about)

        logger.debug(
            "profile_update_succeeded",
            user_id=str(me.id),
            first_name=me.first_name,
            last_name=me.last_name,
            about=me.about,
        )
        return me.to_self_profile()

    # --- Helpers ---

    async def _get_snapshot(self, uow: IUnitOfWork, user_id: UUID) -> UserSnapshot:
        try:
            me = await uow.users.get_immutable_user(user_id)
        except SQLAlchemyError as exc:
            logger.error("user_lookup_failed", user_id=str(user_id), error=str(exc))
            raise UserLookupFailedError(str(user_id), reason=type(exc).__name__) from exc

        if me is None:
            logger.warning("user_lookup_missing", user_id=str(user_id))
            raise UserNotFoundError(str(user_id))
        return me

    def _validate_names(self, request: ProfileUpdateRequest) -> tuple[str, str]:
        if request.first_name is None or request.last_name is None:
            logger.info("profile_update_rejected", reason="names_not_paired")
            raise InvalidFirstNameError("First and last name must be supplied together")

        first_name = request.first_name.strip()
        last_name = request.last_name.strip()
        if not first_name:
            logger.info("profile_update_rejected", reason="empty_first_name")
            raise InvalidFirstNameError("First name must not be empty")
        if len(first_name) > NAME_MAX_LENGTH or len(last_name) > NAME_MAX_LENGTH:
            logger.info("profile_update_rejected", reason="name_too_long")
            raise InvalidFirstNameError(f"Names must be at most {NAME_MAX_LENGTH} characters")

        return first_name, last_name

    def _validate_about(self, about: str) -> None:
        if len(about) > self._about_max_length:
            logger.info("profile_update_rejected", reason="about_too_long", length=len(about))
            raise AboutTooLongError(len(about), self._about_max_length)

    async def _apply_names(
        self,
        uow: IUnitOfWork,
        me: UserSnapshot,
        first_name: str,
        last_name: str,
        session: SessionContext,
    ) -> UserSnapshot:
        if me.names_match(first_name, last_name):
            logger.debug("profile_names_unchanged", user_id=str(me.id))
            return me

        try:
            applied = await uow.users.update_first_and_last_name(
                me.id,
                first_name,
                last_name,
                expected_first_name=me.first_name,
                expected_last_name=me.last_name,
            )
            if applied:
                await uow.commit()
        except SQLAlchemyError as exc:
            logger.error("profile_names_write_failed", user_id=str(me.id), error=str(exc))
            raise DownstreamWriteFailedError(str(me.id), "name") from exc

        if not applied:
            logger.warning("profile_names_conflict", user_id=str(me.id))
            raise ProfileConflictError(str(me.id), "name")

        logger.info("profile_names_updated", user_id=str(me.id))
        me = me.with_names(first_name, last_name)

        await self._updates.notify_name_changed(
            account_id=me.id,
            origin_session_key=session.session_key,
            first_name=me.first_name,
            last_name=me.last_name,
            username=me.username,
            uow=uow,
        )
        return me

    async def _apply_about(self, uow: IUnitOfWork, me: UserSnapshot, about: str) -> UserSnapshot:
        if about == me.about:
            logger.debug("profile_about_unchanged", user_id=str(me.id))
            return me

        try:
            applied = await uow.users.update_about(me.id, about, expected_about=me.about)
            if applied:
                await uow.commit()
        except SQLAlchemyError as exc:
            logger.error("profile_about_write_failed", user_id=str(me.id), error=str(exc))
            raise DownstreamWriteFailedError(str(me.id), "about") from exc

        if not applied:
            logger.warning("profile_about_conflict", user_id=str(me.id))
            raise ProfileConflictError(str(me.id), "about")

        logger.info("profile_about_updated", user_id=str(me.id))
        return me.with_about(about)
