"""Session tokens issued by the external identity provider.

Pal never issues tokens in production. It checks the shared-secret signature,
the expiry and, when configured, the audience, then reads the user id from
the ``sub`` claim.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from pal.config import AuthSettings

REQUIRED_CLAIMS = ["exp", "sub"]


class TokenPayload(BaseModel):
    sub: str
    exp: datetime
    email: str | None = None
    role: str | None = None

    @property
    def user_id(self) -> str:
        return self.sub


class JWTError(Exception):
    """Raised for any token that must not open a session."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    email: str | None = None,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Sign a token the way the identity provider does. For tests and local tooling."""
    claims = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + expires_in,
        "role": "authenticated",
    }
    if email:
        claims["email"] = email
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode ``token`` after checking signature, expiry and audience.

    Raises:
        JWTError: If any check fails or a required claim is missing
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={
                "require": REQUIRED_CLAIMS,
                "verify_aud": settings.jwt_audience is not None,
            },
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e
    return TokenPayload.model_validate(claims)
