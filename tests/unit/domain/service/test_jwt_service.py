"""Unit tests for JWTService."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from pal.config import AuthSettings
from pal.domain.service import JWTService
from pal.util.jwt import JWTError, create_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestAuthenticate:
    def test_valid_token_yields_user_id(self):
        # Arrange
        user_id = uuid4()
        token = create_token(str(user_id), SETTINGS)

        # Act
        result = JWTService(SETTINGS).authenticate(token)

        # Assert
        assert result == user_id

    def test_expired_token_is_rejected(self):
        token = create_token(str(uuid4()), SETTINGS, expires_in=timedelta(seconds=-5))

        with pytest.raises(JWTError, match="expired"):
            JWTService(SETTINGS).authenticate(token)

    def test_wrong_secret_is_rejected(self):
        token = create_token(str(uuid4()), AuthSettings(jwt_secret="other-secret"))

        with pytest.raises(JWTError):
            JWTService(SETTINGS).authenticate(token)

    def test_wrong_audience_is_rejected(self):
        token = create_token(str(uuid4()), AuthSettings(jwt_secret="test-secret", jwt_audience="admin"))

        with pytest.raises(JWTError):
            JWTService(SETTINGS).authenticate(token)

    def test_non_uuid_subject_is_rejected(self):
        token = create_token("alice", SETTINGS)

        with pytest.raises(JWTError):
            JWTService(SETTINGS).authenticate(token)

    def test_missing_subject_is_rejected(self):
        token = jwt.encode({"aud": "authenticated", "exp": 4102444800}, "test-secret", algorithm="HS256")

        with pytest.raises(JWTError):
            JWTService(SETTINGS).authenticate(token)
