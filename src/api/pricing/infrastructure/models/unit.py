"""SQLAlchemy ORM model for the units table.

Units of measure (hour, each, kg, ...) are defined per tenant and
referenced by every rate card item and price book entry.
"""

from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin


class UnitModel(Base, TimestampMixin, TenantScopedMixin):
    """ORM model for units table."""

    __tablename__ = "units"
    __table_args__ = (
        UniqueConstraint("tenant_id", "code", name="uq_units_tenant_code"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    code: Mapped[str] = mapped_column(String(16), nullable=False)
    label: Mapped[str] = mapped_column(String(64), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False, default="UNIT")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UnitModel(id={self.id}, code={self.code}, tenant_id={self.tenant_id})>"
