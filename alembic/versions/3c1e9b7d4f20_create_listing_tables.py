"""Create car_listings and saved_listings

Revision ID: 3c1e9b7d4f20
Revises:
Create Date: 2026-10-19 10:42:17.316402

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1e9b7d4f20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "car_listings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("brand", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=True),
        sa.Column("fuel_type", sa.String(length=20), nullable=True),
        sa.Column("transmission", sa.String(length=20), nullable=True),
        sa.Column("category", sa.String(length=30), nullable=True),
        sa.Column("color", sa.String(length=30), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("images", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("features", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_car_listings_user_id", "car_listings", ["user_id"])
    op.create_index("ix_car_listings_brand", "car_listings", ["brand"])
    op.create_index("ix_car_listings_category", "car_listings", ["category"])
    # Default browse order
    op.create_index("ix_car_listings_created_at", "car_listings", ["created_at"])

    op.create_table(
        "saved_listings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("listing_id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["listing_id"], ["car_listings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "listing_id", name="uq_saved_listings_user_listing"),
    )
    op.create_index("ix_saved_listings_user_id", "saved_listings", ["user_id"])
    op.create_index("ix_saved_listings_created_at", "saved_listings", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_saved_listings_created_at", table_name="saved_listings")
    op.drop_index("ix_saved_listings_user_id", table_name="saved_listings")
    op.drop_table("saved_listings")
    op.drop_index("ix_car_listings_created_at", table_name="car_listings")
    op.drop_index("ix_car_listings_category", table_name="car_listings")
    op.drop_index("ix_car_listings_brand", table_name="car_listings")
    op.drop_index("ix_car_listings_user_id", table_name="car_listings")
    op.drop_table("car_listings")
