"""Session token verification."""

from uuid import UUID

import logfire

from pal.config import AuthSettings
from pal.domain.value import UserId
from pal.util.jwt import JWTError, verify_token

from .base import Service


class JWTService(Service):
    """Turns an identity-provider token into the id of a Pal user."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def authenticate(self, token: str) -> UserId:
        """Verify the token and return the user id in its subject claim.

        Raises:
            JWTError: If the token is invalid, expired or its subject is not a UUID
        """
        with logfire.span("jwt_service.authenticate"):
            try:
                payload = verify_token(token, self.auth_settings)
                user_id = UserId(UUID(payload.user_id))
            except (JWTError, ValueError) as e:
                logfire.warn("Session token rejected", error=str(e))
                raise JWTError(str(e)) from e
            logfire.info("Session token verified", user_id=str(user_id))
            return user_id
