"""SQLAlchemy ORM models for price books and their entries.

A price book is a tenant's catalog rule set in one currency. Entries
price a product (or one of its variants) per unit, optionally limited to
a quantity tier, a validity window, a user or a role.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.infrastructure.models import UserModel
from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin
from pricing.infrastructure.models.unit import UnitModel


class PriceBookModel(Base, TimestampMixin, TenantScopedMixin):
    """ORM model for price_books table."""

    __tablename__ = "price_books"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_price_books_tenant_name"),
        Index("ix_price_books_tenant_default", "tenant_id", "is_active", "is_default"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    entries: Mapped[list[PriceBookEntryModel]] = relationship(
        back_populates="price_book",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PriceBookModel(id={self.id}, name={self.name}, tenant_id={self.tenant_id})>"


class PriceBookEntryModel(Base, TimestampMixin):
    """ORM model for price_book_entries table.

    Exactly one of ``product_id`` and ``variant_id`` is set.
    """

    __tablename__ = "price_book_entries"
    __table_args__ = (
        CheckConstraint(
            "(product_id IS NULL) <> (variant_id IS NULL)",
            name="ck_price_book_entries_product_xor_variant",
        ),
        CheckConstraint(
            "min_qty IS NULL OR max_qty IS NULL OR max_qty >= min_qty",
            name="ck_price_book_entries_qty_bounds",
        ),
        Index("ix_price_book_entries_book_product", "price_book_id", "product_id"),
        Index("ix_price_book_entries_book_variant", "price_book_id", "variant_id"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    price_book_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("price_books.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    variant_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    unit_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("units.id", ondelete="RESTRICT"), nullable=False
    )
    unit_price: Mapped[Decimal] = mapped_column(nullable=False)
    min_qty: Mapped[Decimal | None] = mapped_column(nullable=True)
    max_qty: Mapped[Decimal | None] = mapped_column(nullable=True)
    valid_from: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    valid_to: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    price_book: Mapped[PriceBookModel] = relationship(back_populates="entries")
    unit: Mapped[UnitModel] = relationship()
    user: Mapped[UserModel | None] = relationship()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PriceBookEntryModel(id={self.id}, price_book_id={self.price_book_id})>"
