"""couple_links_and_reopened_matches

- Couple links (partner account linking by email, confirmed by the partner)
- matches.reopened_from marks records re-created by an undo

Revision ID: 8e2d5c6a1f07
Revises: 3c1f9a7d2b41
Create Date: 2025-06-20 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "8e2d5c6a1f07"
down_revision: Union[str, Sequence[str], None] = "3c1f9a7d2b41"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "matches",
        sa.Column("reopened_from", sa.UUID(), nullable=True),
    )
    op.create_foreign_key(
        "fk_matches_reopened_from",
        "matches",
        "matches",
        ["reopened_from"],
        ["id"],
        ondelete="SET NULL",
    )

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE relationship_status AS ENUM ('couple', 'married');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # COUPLE_LINKS table
    # ========================================================================
    op.create_table(
        "couple_links",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column("partner_id", sa.UUID(), nullable=False),
        sa.Column(
            "relationship",
            postgresql.ENUM(name="relationship_status", create_type=False),
            nullable=False,
            server_default="couple",
        ),
        sa.Column("confirmed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("linked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["partner_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("requester_id <> partner_id", name="no_self_link"),
        sa.CheckConstraint(
            "confirmed = (linked_at IS NOT NULL)", name="linked_at_iff_confirmed"
        ),
    )
    op.create_index(
        "idx_couple_links_requester_id", "couple_links", ["requester_id"]
    )
    op.create_index("idx_couple_links_partner_id", "couple_links", ["partner_id"])
    op.execute("""
        CREATE UNIQUE INDEX idx_couple_links_unique_pair ON couple_links (
            LEAST(requester_id, partner_id), GREATEST(requester_id, partner_id)
        )
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS idx_couple_links_unique_pair")
    op.drop_index("idx_couple_links_partner_id", table_name="couple_links")
    op.drop_index("idx_couple_links_requester_id", table_name="couple_links")
    op.drop_table("couple_links")
    op.execute("DROP TYPE IF EXISTS relationship_status")

    op.drop_constraint("fk_matches_reopened_from", "matches", type_="foreignkey")
    op.drop_column("matches", "reopened_from")
