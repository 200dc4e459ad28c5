"""JWT token domain service."""

from uuid import UUID

import logfire

from mealtalk.config import AuthSettings
from mealtalk.domain.value import UserId
from mealtalk.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Resolves bearer credentials to user identities."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=str(user_id)):
            return create_token(str(user_id), self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def resolve_identity(self, token: str) -> UserId:
        """Resolve a bearer token to the identity it was issued for.

        Args:
            token: JWT token string

        Returns:
            User ID carried by the token

        Raises:
            JWTError: If token is invalid, expired, or its user id is malformed
        """
        payload = self.verify_token(token)
        try:
            return UserId(UUID(payload.user_id))
        except ValueError:
            logfire.warn("JWT carries malformed user id", user_id=payload.user_id)
            raise JWTError("Invalid token")
