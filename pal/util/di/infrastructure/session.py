"""Session context providers."""

from dishka import Scope, provide
from fastapi import Request

from pal.domain.model import SessionContext
from pal.domain.service import JWTService
from pal.util.clock import Clock
from pal.util.di.base import ProviderBase
from pal.util.error import NotAuthenticatedError
from pal.util.jwt import JWTError

SESSION_COOKIE = "auth_token"


def extract_token(request: Request) -> str | None:
    """Read the session token from the cookie or the Authorization header."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


class SessionProvider(ProviderBase):
    """Session component base."""

    __mock_component__ = "session"


class ProdSessionProvider(SessionProvider):
    """Session context derived from the identity provider's token."""

    __is_mock__ = False

    @provide(scope=Scope.REQUEST)
    def get_session_context(
        self, request: Request, jwt_service: JWTService, clock: Clock
    ) -> SessionContext:
        """Provide the session of the authenticated caller.

        Raises:
            NotAuthenticatedError: If the token is missing or invalid
        """
        token = extract_token(request)
        if not token:
            raise NotAuthenticatedError("Not authenticated")
        try:
            user_id = jwt_service.authenticate(token)
        except JWTError as e:
            raise NotAuthenticatedError(str(e)) from e
        return SessionContext(user_id=user_id, started_at=clock.now())
