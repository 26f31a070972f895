"""create price books tables

Price books hold catalog prices. Each entry prices exactly one of a
product or a variant, optionally within a quantity tier.

Revision ID: e92d41b86f07
Revises: c7e05f3a9e61
Create Date: 2026-09-15 09:41:02.150377

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "e92d41b86f07"
down_revision: Union[str, Sequence[str], None] = "c7e05f3a9e61"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "price_books",
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
        sa.UniqueConstraint("tenant_id", "name", name="uq_price_books_tenant_name"),
    )
    op.create_index(
        op.f("ix_price_books_tenant_id"), "price_books", ["tenant_id"], unique=False
    )
    op.create_index(
        "ix_price_books_tenant_default",
        "price_books",
        ["tenant_id", "is_active", "is_default"],
        unique=False,
    )

    op.create_table(
        "price_book_entries",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("price_book_id", sa.String(length=26), nullable=False),
        sa.Column("product_id", sa.String(length=26), nullable=True),
        sa.Column("variant_id", sa.String(length=26), nullable=True),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("unit_id", sa.String(length=26), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("min_qty", sa.Numeric(precision=18, scale=6), nullable=True),
        sa.Column("max_qty", sa.Numeric(precision=18, scale=6), nullable=True),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_to", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "(product_id IS NULL) <> (variant_id IS NULL)",
            name="ck_price_book_entries_product_xor_variant",
        ),
        sa.CheckConstraint(
            "min_qty IS NULL OR max_qty IS NULL OR max_qty >= min_qty",
            name="ck_price_book_entries_qty_bounds",
        ),
        sa.ForeignKeyConstraint(
            ["price_book_id"], ["price_books.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_price_book_entries_book_product",
        "price_book_entries",
        ["price_book_id", "product_id"],
        unique=False,
    )
    op.create_index(
        "ix_price_book_entries_book_variant",
        "price_book_entries",
        ["price_book_id", "variant_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "ix_price_book_entries_book_variant", table_name="price_book_entries"
    )
    op.drop_index(
        "ix_price_book_entries_book_product", table_name="price_book_entries"
    )
    op.drop_table("price_book_entries")
    op.drop_index("ix_price_books_tenant_default", table_name="price_books")
    op.drop_index(op.f("ix_price_books_tenant_id"), table_name="price_books")
    op.drop_table("price_books")
