"""DI provider for auth domain."""

from dishka import from_context, provide
from starlette.requests import Request

from sweep.config import Config
from sweep.domain.auth.service.token import CurrentUser, TokenService
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


def bearer_token(request: Request) -> str | None:
    """Return the token of a ``Bearer`` Authorization header, if present."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:]  # Remove "Bearer " prefix


class AuthProvider(Provider):
    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_current_user(self, request: Request, token_service: TokenService) -> CurrentUser:
        """Extract and validate CurrentUser from the JWT in the Authorization header.

        Raises:
            AuthenticationError: If token is missing, expired, or invalid
        """
        return token_service.authenticate(bearer_token(request))
