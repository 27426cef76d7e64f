"""Verifies OIDC tokens attached by the task queue to worker callbacks."""

import asyncio
import logging

import jwt

from sweep.domain.cleanup.port.caller_verifier import TaskCaller, TaskCallerVerifier
from sweep.domain.shared.error import AuthenticationError, ExternalServiceError

logger = logging.getLogger(__name__)


class OidcTaskCallerVerifier(TaskCallerVerifier):
    """Accepts only RS256 ID tokens minted for the queue's service account.

    Checks signature (issuer JWKS), audience, issuer, ``email`` and
    ``email_verified``.
    """

    def __init__(
        self,
        jwks_client: jwt.PyJWKClient,
        audience: str,
        service_account_email: str,
        issuers: list[str],
    ) -> None:
        self._jwks_client = jwks_client
        self.audience = audience
        self.service_account_email = service_account_email
        self.issuers = frozenset(issuers)

    async def verify(self, token: str | None) -> TaskCaller:
        if not token:
            raise AuthenticationError("Authorization header required", code="missing_token")

        if not self.service_account_email or not self.audience:
            logger.error("Task caller verification is not configured; rejecting request")
            raise AuthenticationError("Task callers are not accepted", code="invalid_token")

        try:
            # Key fetch may hit the network; PyJWKClient caches the key set
            signing_key = await asyncio.to_thread(
                self._jwks_client.get_signing_key_from_jwt, token
            )
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.audience,
                options={"require": ["exp", "iat", "iss", "aud"]},
            )
        except jwt.PyJWKClientConnectionError as e:
            raise ExternalServiceError(f"Could not fetch signing keys: {e}") from e
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired", code="token_expired") from e
        except jwt.PyJWTError as e:
            logger.warning("Rejected task caller token: %s", e)
            raise AuthenticationError("Invalid token", code="invalid_token") from e

        if claims.get("iss") not in self.issuers:
            logger.warning("Rejected task caller token from issuer %s", claims.get("iss"))
            raise AuthenticationError("Invalid token issuer", code="invalid_token")

        email = claims.get("email")
        if email != self.service_account_email or claims.get("email_verified") is not True:
            logger.warning("Rejected task caller identity %s", email)
            raise AuthenticationError("Caller is not the task queue", code="invalid_token")

        return TaskCaller(email=email, subject=str(claims.get("sub", "")))
