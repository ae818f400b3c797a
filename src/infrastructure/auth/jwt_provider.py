"""JWT authentication provider implementation.

Session token payload structure:
    {
        "sub": "user-uuid",
        "sid": "session key (permanent auth key id of the device)",
        "phone": "+15550100",
        "layer": 158,
        "role": "user",
        "exp": 1234567890
    }
"""

from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """JWT-based authentication provider for HS256 session tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract the session.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        user_id = payload.get("sub")
        session_key = payload.get("sid")
        if not user_id or not session_key:
            logger.debug("token_missing_claims", has_sub=bool(user_id), has_sid=bool(session_key))
            return None

        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return None

        layer = payload.get("layer")
        return TokenUser(
            id=parsed_id,
            session_key=str(session_key),
            phone=payload.get("phone"),
            layer=layer if isinstance(layer, int) else None,
            role=payload.get("role"),
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT token for a user session (used by tests and tooling).

        Args:
            user: The user session to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.now(UTC) + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "sid": user.session_key,
            "role": user.role or "user",
            "exp": expire,
        }
        if user.phone:
            payload["phone"] = user.phone
        if user.layer is not None:
            payload["layer"] = user.layer

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
