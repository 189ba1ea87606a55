"""SQLAlchemy table definitions for the forum.

These table definitions are used for classical ORM mapping.
They match the schema defined in Alembic migrations.

Foreign keys are declared without ON DELETE actions: every dependent row
is removed explicitly by the cascade services, in dependency order, so a
missed step fails loudly instead of being papered over by the database.
Votes and follows reference their targets polymorphically and have no
foreign key to them at all.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(32), nullable=False, unique=True),
    Column("email", String(255), nullable=True),
    Column("bio", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("creator_id", UUID, ForeignKey("users.id"), nullable=False),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_communities_creator_id", communities_table.c.creator_id)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, ForeignKey("users.id"), nullable=False),
    # NULL once the community was removed together with its creator
    Column("community_id", UUID, ForeignKey("communities.id"), nullable=True),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column("score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_community_id", posts_table.c.community_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id"), nullable=False),
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column("author_id", UUID, ForeignKey("users.id"), nullable=False),
    Column("content", Text, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE (polymorphic target: post or comment)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    Column(
        "target_type",
        Enum("post", "comment", name="vote_target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="unique_vote"),
    CheckConstraint("value IN (1, -1)", name="vote_value_valid"),
)

# Cascades delete votes by target; the unique key only covers lookups by user
Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)

# ============================================================================
# FOLLOWS TABLE (polymorphic target: user or community)
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id"), nullable=False),
    Column(
        "target_type",
        Enum("user", "community", name="follow_target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="unique_follow"),
)

Index("idx_follows_target", follows_table.c.target_type, follows_table.c.target_id)
