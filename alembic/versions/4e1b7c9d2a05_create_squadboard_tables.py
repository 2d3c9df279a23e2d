"""create squadboard tables

Revision ID: 4e1b7c9d2a05
Revises:
Create Date: 2026-09-28 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4e1b7c9d2a05"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "account_type",
            sa.Enum("REGULAR", "ADMIN", name="account_type"),
            server_default="REGULAR",
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("tracker_platform", sa.String(), nullable=True),
        sa.Column("tracker_handle", sa.String(), nullable=True),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("current_rank_tier", sa.String(), nullable=True),
        sa.Column("current_rank_division", sa.Integer(), nullable=True),
        sa.Column("max_rank_tier", sa.String(), nullable=True),
        sa.Column("max_rank_division", sa.Integer(), nullable=True),
        sa.Column("tracker_level", sa.Integer(), nullable=True),
        sa.Column("tracker_rank_score", sa.Integer(), nullable=True),
        sa.Column("tracker_kills", sa.BigInteger(), nullable=True),
        sa.Column("tracker_damage", sa.BigInteger(), nullable=True),
        sa.Column("age_group", sa.String(), nullable=True),
        sa.Column("updated", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "play_style_tags",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="t", nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_play_style_tags_id"), "play_style_tags", ["id"], unique=False)
    op.create_index(op.f("ix_play_style_tags_is_active"), "play_style_tags", ["is_active"], unique=False)

    op.create_table(
        "listings",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("recruit_count", sa.Integer(), server_default="1", nullable=False),
        sa.Column("mode", sa.String(), nullable=False),
        sa.Column("allowed_age_groups", postgresql.ARRAY(sa.String()), server_default="{}", nullable=False),
        sa.Column("min_rank_tier", sa.String(), nullable=True),
        sa.Column("min_rank_division", sa.Integer(), nullable=True),
        sa.Column("vc_type", sa.String(), nullable=False),
        sa.Column("play_styles", postgresql.ARRAY(sa.String()), server_default="{}", nullable=False),
        sa.Column("other_text", sa.Text(), server_default="", nullable=False),
        sa.Column("current_rank_tier", sa.String(), nullable=True),
        sa.Column("current_rank_division", sa.Integer(), nullable=True),
        sa.Column("max_rank_tier", sa.String(), nullable=True),
        sa.Column("max_rank_division", sa.Integer(), nullable=True),
        sa.Column("age_group", sa.String(), nullable=True),
        sa.Column("platform", sa.String(), nullable=True),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("is_closed", sa.Boolean(), server_default="f", nullable=False),
        sa.Column("winner_user_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["winner_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_listings_id"), "listings", ["id"], unique=False)
    op.create_index(op.f("ix_listings_user_id"), "listings", ["user_id"], unique=False)
    op.create_index(op.f("ix_listings_created"), "listings", ["created"], unique=False)
    op.create_index(op.f("ix_listings_is_closed"), "listings", ["is_closed"], unique=False)
    op.create_index(
        "ix_listings_one_open_per_owner",
        "listings",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("is_closed = FALSE"),
    )

    op.create_table(
        "applications",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("listing_id", sa.BigInteger(), nullable=False),
        sa.Column("applicant_user_id", sa.BigInteger(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["applicant_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("listing_id", "applicant_user_id"),
    )
    op.create_index(op.f("ix_applications_id"), "applications", ["id"], unique=False)
    op.create_index(op.f("ix_applications_listing_id"), "applications", ["listing_id"], unique=False)
    op.create_index(
        op.f("ix_applications_applicant_user_id"), "applications", ["applicant_user_id"], unique=False
    )

    op.create_table(
        "result_notices",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("listing_id", sa.BigInteger(), nullable=True),
        sa.Column("listing_title", sa.String(), nullable=False),
        sa.Column("vc_type", sa.String(), nullable=True),
        sa.Column("recruiter_user_id", sa.BigInteger(), nullable=False),
        sa.Column("applicant_user_id", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.Enum("selected", "rejected", name="result_status"), nullable=False),
        sa.Column("account_name", sa.String(), nullable=True),
        sa.Column("invite_link", sa.String(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["recruiter_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["applicant_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("listing_id", "applicant_user_id"),
    )
    op.create_index(op.f("ix_result_notices_id"), "result_notices", ["id"], unique=False)
    op.create_index(op.f("ix_result_notices_listing_id"), "result_notices", ["listing_id"], unique=False)
    op.create_index(
        op.f("ix_result_notices_applicant_user_id"), "result_notices", ["applicant_user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_table("result_notices")
    op.drop_table("applications")
    op.drop_index("ix_listings_one_open_per_owner", table_name="listings")
    op.drop_table("listings")
    op.drop_table("play_style_tags")
    op.drop_table("profiles")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS result_status")
    op.execute("DROP TYPE IF EXISTS account_type")
