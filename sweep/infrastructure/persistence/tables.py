"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TWEETS TABLE
# ============================================================================
tweets_table = Table(
    "tweets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", String, nullable=False),
    Column("content", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_tweets_owner_id", tweets_table.c.owner_id)


# ============================================================================
# TWEET MEDIA TABLE
# ============================================================================
tweet_media_table = Table(
    "tweet_media",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "tweet_id",
        Integer,
        ForeignKey("tweets.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("media_url", Text, nullable=False),
    # Null for rows written before prefixes were stored; derived from media_url
    Column("storage_prefix", Text, nullable=True),
)

Index("idx_tweet_media_tweet_id", tweet_media_table.c.tweet_id)
