"""SQLAlchemy ORM models for rate cards and their items.

A rate card is a tenant's internal billing rule set; each item prices one
unit for a user, a role, or everyone, within an optional validity window.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.infrastructure.models import UserModel
from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin
from pricing.infrastructure.models.unit import UnitModel


class RateCardModel(Base, TimestampMixin, TenantScopedMixin):
    """ORM model for rate_cards table."""

    __tablename__ = "rate_cards"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_rate_cards_tenant_name"),
        Index("ix_rate_cards_tenant_default", "tenant_id", "is_active", "is_default"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    items: Mapped[list[RateCardItemModel]] = relationship(
        back_populates="rate_card",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RateCardModel(id={self.id}, name={self.name}, tenant_id={self.tenant_id})>"


class RateCardItemModel(Base, TimestampMixin):
    """ORM model for rate_card_items table.

    ``user_id`` and ``role`` are both nullable; a row with neither is the
    card's unscoped default.
    """

    __tablename__ = "rate_card_items"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    rate_card_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("rate_cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    unit_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("units.id", ondelete="RESTRICT"), nullable=False
    )
    product_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    unit_price: Mapped[Decimal] = mapped_column(nullable=False)
    valid_from: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    valid_to: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    rate_card: Mapped[RateCardModel] = relationship(back_populates="items")
    unit: Mapped[UnitModel] = relationship()
    user: Mapped[UserModel | None] = relationship()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RateCardItemModel(id={self.id}, rate_card_id={self.rate_card_id})>"
