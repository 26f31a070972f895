"""SQLAlchemy ORM model for the users table.

Users are provisioned by the upstream identity provider; this table only
stores the metadata needed to label user-specific rate card items.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table (metadata only).

    Note: id is VARCHAR(255) to accommodate external SSO IDs (UUIDs, Auth0, etc.)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, username={self.username})>"
