"""Tweet REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response

from sweep.domain.auth.service.token import CurrentUser
from sweep.domain.tweet.model.value import TweetId
from sweep.domain.tweet.service.tweet import TweetService

router = APIRouter(prefix="/tweets", tags=["Tweets"], route_class=DishkaRoute)


@router.delete("/{tweet_id}", status_code=204)
async def delete_tweet(
    tweet_id: int,
    current_user: FromDishka[CurrentUser],
    service: FromDishka[TweetService],
) -> Response:
    """Delete one of the caller's tweets and schedule cleanup of its media."""
    await service.delete_tweet(TweetId(tweet_id), current_user.user_id)
    return Response(status_code=204)
