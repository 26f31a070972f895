"""create rate cards tables

Rate cards hold internal billing rates. Each item targets a user, a role,
or nobody (the card default) within an optional half-open validity window.

Revision ID: c7e05f3a9e61
Revises: 8b24e6d0c5a3
Create Date: 2026-09-14 11:05:30.772941

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c7e05f3a9e61"
down_revision: Union[str, Sequence[str], None] = "8b24e6d0c5a3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "rate_cards",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "name", name="uq_rate_cards_tenant_name"),
    )
    op.create_index(
        op.f("ix_rate_cards_tenant_id"), "rate_cards", ["tenant_id"], unique=False
    )
    op.create_index(
        "ix_rate_cards_tenant_default",
        "rate_cards",
        ["tenant_id", "is_active", "is_default"],
        unique=False,
    )

    op.create_table(
        "rate_card_items",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("rate_card_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("unit_id", sa.String(length=26), nullable=False),
        sa.Column("product_id", sa.String(length=26), nullable=True),
        sa.Column("unit_price", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_to", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["rate_card_id"], ["rate_cards.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_rate_card_items_rate_card_id"),
        "rate_card_items",
        ["rate_card_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f("ix_rate_card_items_rate_card_id"), table_name="rate_card_items"
    )
    op.drop_table("rate_card_items")
    op.drop_index("ix_rate_cards_tenant_default", table_name="rate_cards")
    op.drop_index(op.f("ix_rate_cards_tenant_id"), table_name="rate_cards")
    op.drop_table("rate_cards")
