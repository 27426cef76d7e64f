"""Token service for end-user JWT creation and validation."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from sweep.config import JwtConfig
from sweep.domain.shared.error import AuthenticationError, ConfigurationError
from sweep.domain.shared.model.value import ValueObject
from sweep.domain.shared.service import Service
from sweep.domain.tweet.model.value import OwnerId

logger = logging.getLogger(__name__)

AUDIENCE = "authenticated"


class CurrentUser(ValueObject):
    """Authenticated user from JWT token."""

    user_id: OwnerId


class TokenService(Service):
    """Service for JWT access token operations (HS256, user id in ``sub``)."""

    _config: JwtConfig

    def create_access_token(
        self,
        user_id: OwnerId,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload = {
            "sub": str(user_id),
            "aud": AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(payload, self._signing_key(), algorithm=self._config.algorithm)

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
            ConfigurationError: If no signing secret is configured
        """
        return jwt.decode(
            token,
            self._signing_key(),
            algorithms=[self._config.algorithm],
            audience=AUDIENCE,
        )

    def authenticate(self, token: str | None) -> CurrentUser:
        """Resolve the user behind a bearer token.

        Raises:
            AuthenticationError: Token missing, expired or invalid.
        """
        if not token:
            raise AuthenticationError("Authorization header required", code="missing_token")

        try:
            payload = self.validate_access_token(token)
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired", code="token_expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token", code="invalid_token") from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Invalid token", code="invalid_token")
        return CurrentUser(user_id=OwnerId(subject))

    def _signing_key(self) -> str:
        # An empty HMAC key would sign and accept forged tokens
        if not self._config.secret:
            logger.error("JWT secret is not configured (SWEEP_AUTH__JWT__SECRET)")
            raise ConfigurationError("JWT secret is not configured", code="auth_not_configured")
        return self._config.secret
