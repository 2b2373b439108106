"""Create properties table for the listing catalog.

Revision ID: 20250301100000
Revises: 20250301000000
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301100000"
down_revision: Union[str, None] = "20250301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("price_formatted", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("bedrooms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bathrooms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("land_area", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("building_area", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("property_type", sa.String(length=64), nullable=False, server_default="house"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Dijual"),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("images", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('Dijual', 'Disewa', 'Terjual')", name="ck_properties_status"
        ),
    )
    op.create_index(op.f("ix_properties_location"), "properties", ["location"], unique=False)
    op.create_index(
        op.f("ix_properties_property_type"), "properties", ["property_type"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_properties_property_type"), table_name="properties")
    op.drop_index(op.f("ix_properties_location"), table_name="properties")
    op.drop_table("properties")
