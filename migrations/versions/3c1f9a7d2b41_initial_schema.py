"""initial_schema

Create the foundational schema for Pal:
- Users (profile, interests, premium status, daily super-like quota)
- Matches (directed proposals with at most one active match per direction)
- Messages (chat inside accepted matches)
- Meetup invites (place/time proposals with a change-proposal state)
- Swipe actions (last accept/decline per user, for undo)
- Change notification trigger feeding the realtime channel

Revision ID: 3c1f9a7d2b41
Revises:
Create Date: 2025-06-01 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2b41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Tables whose row changes are published on the realtime channel
NOTIFY_TABLES = ("matches", "messages", "meetup_invites")


def _create_enum(name: str, *values: str) -> None:
    labels = ", ".join(f"'{v}'" for v in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    _create_enum("social_style", "introvert", "ambivert", "extrovert")
    _create_enum("match_status", "pending", "accepted", "declined")
    _create_enum(
        "meetup_status",
        "pending",
        "accepted",
        "declined",
        "cancelled",
        "proposed_change",
    )
    _create_enum("swipe_decision", "accepted", "declined")

    # ========================================================================
    # USERS table (id is the identity provider's user id)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "gender",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "looking_to_meet",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "social_style",
            postgresql.ENUM(name="social_style", create_type=False),
            nullable=False,
            server_default="ambivert",
        ),
        sa.Column(
            "interests",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("headline", sa.String(150), nullable=True),
        sa.Column("about_me", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),  # Legacy profile text
        sa.Column("profile_picture", sa.Text(), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "super_likes_remaining", sa.Integer(), nullable=False, server_default="1"
        ),
        sa.Column("last_reset_date", sa.Date(), nullable=True),
        sa.Column(
            "last_active",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "super_likes_remaining >= 0", name="super_likes_non_negative"
        ),
    )
    op.execute("CREATE INDEX idx_users_last_active ON users (last_active DESC)")

    # ========================================================================
    # MATCHES table
    # ========================================================================
    op.create_table(
        "matches",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("initiator_id", sa.UUID(), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="match_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "is_super_like", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("retracted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["initiator_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["target_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("initiator_id <> target_id", name="no_self_match"),
    )
    op.create_index("idx_matches_initiator_id", "matches", ["initiator_id"])
    op.create_index("idx_matches_target_id", "matches", ["target_id"])
    op.create_index(
        "idx_matches_unique_active_pair",
        "matches",
        ["initiator_id", "target_id"],
        unique=True,
        postgresql_where=sa.text(
            "status IN ('pending', 'accepted') AND retracted_at IS NULL"
        ),
    )

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("match_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 5000", name="message_content_length"
        ),
    )
    op.create_index(
        "idx_messages_match_created", "messages", ["match_id", "created_at"]
    )

    # ========================================================================
    # MEETUP_INVITES table
    # ========================================================================
    op.create_table(
        "meetup_invites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("match_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("receiver_id", sa.UUID(), nullable=False),
        sa.Column("place", postgresql.JSONB(), nullable=False),
        sa.Column("datetime", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("proposed_datetime", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="meetup_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "(status = 'proposed_change') = (proposed_datetime IS NOT NULL)",
            name="proposed_datetime_iff_proposed_change",
        ),
    )
    op.create_index("idx_meetup_invites_sender_id", "meetup_invites", ["sender_id"])
    op.create_index(
        "idx_meetup_invites_receiver_id", "meetup_invites", ["receiver_id"]
    )

    # ========================================================================
    # SWIPE_ACTIONS table (one row per user: the last accept/decline)
    # ========================================================================
    op.create_table(
        "swipe_actions",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("match_id", sa.UUID(), nullable=False),
        sa.Column(
            "decision",
            postgresql.ENUM(name="swipe_decision", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "performed_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
    )

    # ========================================================================
    # Change notifications (LISTEN pal_changes)
    # ========================================================================
    # Message rows can be large; their old row is left out to stay under the
    # NOTIFY payload limit.
    op.execute("""
        CREATE OR REPLACE FUNCTION pal_notify_change() RETURNS trigger AS $$
        DECLARE
            new_row json;
            old_row json;
        BEGIN
            IF TG_OP <> 'DELETE' AND TG_TABLE_NAME = 'messages' THEN
                -- NOTIFY payloads are capped at 8000 bytes; listeners get a preview
                new_row := (
                    to_jsonb(NEW) || jsonb_build_object('content', left(NEW.content, 500))
                )::json;
            ELSIF TG_OP <> 'DELETE' THEN
                new_row := row_to_json(NEW);
            END IF;
            IF TG_OP <> 'INSERT' AND TG_TABLE_NAME <> 'messages' THEN
                old_row := row_to_json(OLD);
            ELSIF TG_OP = 'DELETE' THEN
                old_row := json_build_object('id', OLD.id);
            END IF;
            PERFORM pg_notify(
                'pal_changes',
                json_build_object(
                    'table', TG_TABLE_NAME,
                    'type', TG_OP,
                    'record', new_row,
                    'old_record', old_row
                )::text
            );
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql;
    """)

    for table in NOTIFY_TABLES:
        op.execute(f"""
            CREATE TRIGGER {table}_notify_change
            AFTER INSERT OR UPDATE OR DELETE ON {table}
            FOR EACH ROW EXECUTE FUNCTION pal_notify_change();
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in NOTIFY_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS {table}_notify_change ON {table}")
    op.execute("DROP FUNCTION IF EXISTS pal_notify_change()")

    op.drop_table("swipe_actions")
    op.drop_index("idx_meetup_invites_receiver_id", table_name="meetup_invites")
    op.drop_index("idx_meetup_invites_sender_id", table_name="meetup_invites")
    op.drop_table("meetup_invites")
    op.drop_index("idx_messages_match_created", table_name="messages")
    op.drop_table("messages")
    op.drop_index("idx_matches_unique_active_pair", table_name="matches")
    op.drop_index("idx_matches_target_id", table_name="matches")
    op.drop_index("idx_matches_initiator_id", table_name="matches")
    op.drop_table("matches")
    op.execute("DROP INDEX IF EXISTS idx_users_last_active")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS swipe_decision")
    op.execute("DROP TYPE IF EXISTS meetup_status")
    op.execute("DROP TYPE IF EXISTS match_status")
    op.execute("DROP TYPE IF EXISTS social_style")
