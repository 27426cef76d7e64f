"""DI provider for authentication adapters."""

import jwt
from dishka import provide

from sweep.config import Config
from sweep.domain.cleanup.port.caller_verifier import TaskCallerVerifier
from sweep.infrastructure.auth.oidc import OidcTaskCallerVerifier
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class AuthInfraProvider(Provider):
    @provide(scope=Scope.APP)
    def get_jwks_client(self, config: Config) -> jwt.PyJWKClient:
        return jwt.PyJWKClient(config.tasks.jwks_url, cache_keys=True)

    @provide(scope=Scope.APP)
    def get_task_caller_verifier(
        self, jwks_client: jwt.PyJWKClient, config: Config
    ) -> TaskCallerVerifier:
        return OidcTaskCallerVerifier(
            jwks_client=jwks_client,
            audience=config.tasks.token_audience,
            service_account_email=config.tasks.service_account_email,
            issuers=config.tasks.issuers,
        )
