"""JWT token domain service."""

import logfire

from remark.config import AuthSettings
from remark.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for viewer tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", user_id=payload.id)
            return payload

    def get_viewer_email(self, token: str | None) -> str | None:
        """Resolve the viewer's email from an optional token.

        Reads never require authentication, so a missing, invalid or expired
        token simply means an anonymous viewer.

        Args:
            token: JWT token string (optional)

        Returns:
            Viewer email if token is valid, None otherwise
        """
        if not token:
            return None

        try:
            return self.verify_token(token).email
        except JWTError as e:
            logfire.debug(
                "JWT verification failed, treating as anonymous", error=str(e)
            )
            return None
