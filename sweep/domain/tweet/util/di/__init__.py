from sweep.domain.tweet.util.di.provider import TweetProvider

__all__ = ["TweetProvider"]
