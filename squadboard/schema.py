from sqlalchemy import ARRAY, Column, ForeignKey, Index, Integer, String, Table, UniqueConstraint, func, text
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import BigInteger, Boolean, DateTime, Enum, Text

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True),
    Column("email", String, nullable=False, index=True, unique=True),
    Column("name", String, nullable=False),
    Column("password_hash", String, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column(
        "account_type",
        Enum(
            "REGULAR",
            "ADMIN",
            name="account_type",
        ),
        nullable=False,
        server_default="REGULAR",
    ),
)

profiles = Table(
    "profiles",
    metadata,
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("tracker_platform", String, nullable=True),
    Column("tracker_handle", String, nullable=True),
    Column("display_name", String, nullable=True),
    Column("avatar_url", String, nullable=True),
    Column("current_rank_tier", String, nullable=True),
    Column("current_rank_division", Integer, nullable=True),
    Column("max_rank_tier", String, nullable=True),
    Column("max_rank_division", Integer, nullable=True),
    Column("tracker_level", Integer, nullable=True),
    Column("tracker_rank_score", Integer, nullable=True),
    Column("tracker_kills", BigInteger, nullable=True),
    Column("tracker_damage", BigInteger, nullable=True),
    Column("age_group", String, nullable=True),
    Column("updated", DateTimeTZ, nullable=False, server_default=func.now()),
)

play_style_tags = Table(
    "play_style_tags",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True),
    Column("is_active", Boolean, nullable=False, server_default="t", index=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
)

listings = Table(
    "listings",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("title", String, nullable=False),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("recruit_count", Integer, nullable=False, server_default="1"),
    Column("mode", String, nullable=False),
    Column("allowed_age_groups", ARRAY(String), nullable=False, server_default="{}"),
    Column("min_rank_tier", String, nullable=True),
    Column("min_rank_division", Integer, nullable=True),
    Column("vc_type", String, nullable=False),
    Column("play_styles", ARRAY(String), nullable=False, server_default="{}"),
    Column("other_text", Text, nullable=False, server_default=""),
    Column("current_rank_tier", String, nullable=True),
    Column("current_rank_division", Integer, nullable=True),
    Column("max_rank_tier", String, nullable=True),
    Column("max_rank_division", Integer, nullable=True),
    Column("age_group", String, nullable=True),
    Column("platform", String, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now(), index=True),
    Column("is_closed", Boolean, nullable=False, server_default="f", index=True),
    Column("winner_user_id", BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
)

Index(
    "ix_listings_one_open_per_owner",
    listings.c.user_id,
    unique=True,
    postgresql_where=text("is_closed = FALSE"),
)

applications = Table(
    "applications",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("listing_id", BigInteger, ForeignKey("listings.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("applicant_user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("listing_id", "applicant_user_id"),
)

result_notices = Table(
    "result_notices",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("listing_id", BigInteger, ForeignKey("listings.id", ondelete="SET NULL"), index=True, nullable=True),
    Column("listing_title", String, nullable=False),
    Column("vc_type", String, nullable=True),
    Column("recruiter_user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "applicant_user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column(
        "status",
        Enum(
            "selected",
            "rejected",
            name="result_status",
        ),
        nullable=False,
    ),
    Column("account_name", String, nullable=True),
    Column("invite_link", String, nullable=True),
    Column("message", Text, nullable=False),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("listing_id", "applicant_user_id"),
)
