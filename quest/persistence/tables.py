"""SQLAlchemy table definitions for Quest.

These table definitions are used for Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# Name of the constraint that makes (provider, provider_user_id) unique.
# Account registration relies on it to detect concurrent first logins.
PROVIDER_IDENTITY_CONSTRAINT = "uq_provider_identity"

character_code_enum = Enum(
    "TRAECHAN", "MASTER", name="character_code", create_type=False
)

# ============================================================================
# USERS TABLE (Provider-agnostic)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=True),
    Column("name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# USER IDENTITIES TABLE (External identity links)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'google'
    Column("provider_user_id", String(255), nullable=False),  # Provider subject id
    Column("provider_email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "provider", "provider_user_id", name=PROVIDER_IDENTITY_CONSTRAINT
    ),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)

# ============================================================================
# CHARACTERS TABLE (Master data, seeded by migration)
# ============================================================================
characters_table = Table(
    "characters",
    metadata,
    Column("character_code", character_code_enum, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USER CHARACTERS TABLE
# ============================================================================
user_characters_table = Table(
    "user_characters",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "character_code",
        character_code_enum,
        ForeignKey("characters.character_code", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("nickname", String(100), nullable=False),
    Column("level", Integer, nullable=False, server_default="1"),
    Column("experience", Integer, nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("level >= 1", name="level_positive"),
    CheckConstraint("experience >= 0", name="experience_non_negative"),
)

Index(
    "idx_user_characters_user_id_is_active",
    user_characters_table.c.user_id,
    user_characters_table.c.is_active,
)
Index("idx_user_characters_character_code", user_characters_table.c.character_code)
