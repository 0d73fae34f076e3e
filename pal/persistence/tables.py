"""SQLAlchemy table definitions for Pal.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    and_,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),  # Identity provider's user id
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=True),
    Column("gender", ARRAY(Text), nullable=False, server_default="{}"),
    Column("looking_to_meet", ARRAY(Text), nullable=False, server_default="{}"),
    Column(
        "social_style",
        Enum(
            "introvert",
            "ambivert",
            "extrovert",
            name="social_style",
            create_type=False,
        ),
        nullable=False,
        server_default="ambivert",
    ),
    Column("interests", JSONB, nullable=False, server_default="[]"),  # [{id, name}]
    Column("headline", String(150), nullable=True),
    Column("about_me", Text, nullable=True),
    Column("bio", Text, nullable=True),  # Legacy, read into about_me
    Column("profile_picture", Text, nullable=True),
    Column("verified", Boolean, nullable=False, server_default="false"),
    Column("is_premium", Boolean, nullable=False, server_default="false"),
    Column("super_likes_remaining", Integer, nullable=False, server_default="1"),
    Column("last_reset_date", Date, nullable=True),
    Column(
        "last_active", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("super_likes_remaining >= 0", name="super_likes_non_negative"),
)

Index("idx_users_last_active", users_table.c.last_active.desc())

# ============================================================================
# MATCHES TABLE
# ============================================================================
matches_table = Table(
    "matches",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "initiator_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "target_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "status",
        Enum("pending", "accepted", "declined", name="match_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column("is_super_like", Boolean, nullable=False, server_default="false"),
    Column("revision", Integer, nullable=False, server_default="0"),
    Column("retracted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "reopened_from",
        UUID,
        ForeignKey("matches.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("initiator_id <> target_id", name="no_self_match"),
)

Index("idx_matches_initiator_id", matches_table.c.initiator_id)
Index("idx_matches_target_id", matches_table.c.target_id)

# One active (pending/accepted, not retracted) match per direction
Index(
    "idx_matches_unique_active_pair",
    matches_table.c.initiator_id,
    matches_table.c.target_id,
    unique=True,
    postgresql_where=and_(
        matches_table.c.status.in_(["pending", "accepted"]),
        matches_table.c.retracted_at.is_(None),
    ),
)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "match_id", UUID, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 5000", name="message_content_length"
    ),
)

Index("idx_messages_match_created", messages_table.c.match_id, messages_table.c.created_at)

# ============================================================================
# MEETUP INVITES TABLE
# ============================================================================
meetup_invites_table = Table(
    "meetup_invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "match_id", UUID, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "receiver_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("place", JSONB, nullable=False),  # {name, address, category}
    Column("datetime", TIMESTAMP(timezone=True), nullable=False),
    Column("proposed_datetime", TIMESTAMP(timezone=True), nullable=True),
    Column("message", Text, nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "declined",
            "cancelled",
            "proposed_change",
            name="meetup_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("revision", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(status = 'proposed_change') = (proposed_datetime IS NOT NULL)",
        name="proposed_datetime_iff_proposed_change",
    ),
)

Index("idx_meetup_invites_sender_id", meetup_invites_table.c.sender_id)
Index("idx_meetup_invites_receiver_id", meetup_invites_table.c.receiver_id)

# ============================================================================
# SWIPE ACTIONS TABLE (last action per user, for undo)
# ============================================================================
swipe_actions_table = Table(
    "swipe_actions",
    metadata,
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "match_id", UUID, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "decision",
        Enum("accepted", "declined", name="swipe_decision", create_type=False),
        nullable=False,
    ),
    Column(
        "performed_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COUPLE_LINKS TABLE
# ============================================================================
couple_links_table = Table(
    "couple_links",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "requester_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "partner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "relationship",
        Enum("couple", "married", name="relationship_status", create_type=False),
        nullable=False,
        server_default="couple",
    ),
    Column("confirmed", Boolean, nullable=False, server_default="false"),
    Column("linked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("revision", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("requester_id <> partner_id", name="no_self_link"),
    CheckConstraint(
        "confirmed = (linked_at IS NOT NULL)", name="linked_at_iff_confirmed"
    ),
)

Index("idx_couple_links_requester_id", couple_links_table.c.requester_id)
Index("idx_couple_links_partner_id", couple_links_table.c.partner_id)

# One link per unordered pair
Index(
    "idx_couple_links_unique_pair",
    func.least(couple_links_table.c.requester_id, couple_links_table.c.partner_id),
    func.greatest(
        couple_links_table.c.requester_id, couple_links_table.c.partner_id
    ),
    unique=True,
)
