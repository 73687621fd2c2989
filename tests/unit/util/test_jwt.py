"""Unit tests for viewer tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from remark.config import AuthSettings
from remark.domain.service import JWTService
from remark.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestTokens:
    """Tests for create_token/verify_token."""

    def test_round_trip_keeps_claims(self):
        """A created token verifies to the same viewer."""
        # Act
        token = create_token("user-1", "alice@example.com", "Alice", SETTINGS)
        payload = verify_token(token, SETTINGS)

        # Assert
        assert payload.id == "user-1"
        assert payload.email == "alice@example.com"
        assert payload.name == "Alice"

    def test_wrong_secret_rejected(self):
        """Tokens signed with another secret are invalid."""
        # Arrange
        token = create_token("user-1", "alice@example.com", None, SETTINGS)

        # Act & Assert
        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other-secret"))

    def test_expired_token_rejected(self):
        """Expired tokens are rejected."""
        # Arrange
        token = jwt.encode(
            {
                "id": "user-1",
                "email": "alice@example.com",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_token_without_email_rejected(self):
        """Tokens lacking viewer claims are rejected."""
        # Arrange
        token = jwt.encode(
            {"id": "user-1", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        # Act & Assert
        with pytest.raises(JWTError, match="missing viewer claims"):
            verify_token(token, SETTINGS)


class TestJWTServiceViewerEmail:
    """Tests for JWTService.get_viewer_email."""

    def test_valid_token_gives_email(self):
        # Arrange
        service = JWTService(auth_settings=SETTINGS)
        token = create_token("user-1", "alice@example.com", None, SETTINGS)

        # Act & Assert
        assert service.get_viewer_email(token) == "alice@example.com"

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_missing_or_invalid_token_is_anonymous(self, token):
        """Invalid tokens never fail a read; the viewer is anonymous."""
        # Arrange
        service = JWTService(auth_settings=SETTINGS)

        # Act & Assert
        assert service.get_viewer_email(token) is None
