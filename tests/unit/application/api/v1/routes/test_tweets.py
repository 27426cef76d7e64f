"""Tests for the tweet deletion route."""

from unittest.mock import AsyncMock

import pytest
from dishka import from_context, make_async_container
from fastapi.testclient import TestClient

from sweep.application.api.rest.app import create_app
from sweep.config import AuthConfig, Config, JwtConfig
from sweep.domain.auth.service.token import TokenService
from sweep.domain.auth.util.di import AuthProvider
from sweep.domain.shared.error import AuthorizationError, NotFoundError
from sweep.domain.tweet.model.value import DeletedTweet, OwnerId, TweetId
from sweep.domain.tweet.service.tweet import TweetService
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope

SECRET = "route-test-secret-key-min-32-chars"


class TweetRouteTestProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    tweet_service = from_context(provides=TweetService, scope=Scope.APP)


@pytest.fixture
def config() -> Config:
    return Config(auth=AuthConfig(jwt=JwtConfig(secret=SECRET)))


@pytest.fixture
def service() -> AsyncMock:
    service = AsyncMock(spec=TweetService)
    service.delete_tweet.return_value = DeletedTweet(
        tweet_id=TweetId(5), owner_id=OwnerId("u1")
    )
    return service


@pytest.fixture
def client(config: Config, service: AsyncMock) -> TestClient:
    container = make_async_container(
        TweetRouteTestProvider(),
        AuthProvider(),
        context={Config: config, TweetService: service},
        scopes=Scope,  # type: ignore[arg-type]
    )
    return TestClient(create_app(config=config, container=container))


def _auth(config: Config, user_id: str = "u1") -> dict[str, str]:
    token = TokenService(_config=config.auth.jwt).create_access_token(OwnerId(user_id))
    return {"Authorization": f"Bearer {token}"}


class TestDeleteTweet:
    def test_owner_deletes_tweet(self, client, config, service):
        response = client.delete("/api/v1/tweets/5", headers=_auth(config))

        assert response.status_code == 204
        service.delete_tweet.assert_awaited_once_with(5, "u1")

    def test_missing_token_is_401(self, client, service):
        response = client.delete("/api/v1/tweets/5")

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"
        service.delete_tweet.assert_not_awaited()

    def test_invalid_token_is_401(self, client, service):
        response = client.delete("/api/v1/tweets/5", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_token"

    def test_other_owner_is_403(self, client, config, service):
        service.delete_tweet.side_effect = AuthorizationError("You can only delete your own tweets")

        response = client.delete("/api/v1/tweets/5", headers=_auth(config, "u2"))

        assert response.status_code == 403

    def test_unknown_tweet_is_404(self, client, config, service):
        service.delete_tweet.side_effect = NotFoundError("Tweet not found: 5")

        response = client.delete("/api/v1/tweets/5", headers=_auth(config))

        assert response.status_code == 404

    def test_missing_jwt_secret_is_503(self, service, monkeypatch):
        monkeypatch.delenv("SWEEP_AUTH__JWT__SECRET", raising=False)
        config = Config(auth=AuthConfig(jwt=JwtConfig(secret="")))
        container = make_async_container(
            TweetRouteTestProvider(),
            AuthProvider(),
            context={Config: config, TweetService: service},
            scopes=Scope,  # type: ignore[arg-type]
        )
        client = TestClient(create_app(config=config, container=container))

        response = client.delete("/api/v1/tweets/5", headers={"Authorization": "Bearer forged"})

        assert response.status_code == 503
        assert response.json()["code"] == "auth_not_configured"
        service.delete_tweet.assert_not_awaited()
