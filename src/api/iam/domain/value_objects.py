"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant (organization).

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Accepts case-insensitive input (Crockford's Base32) and stores the
        canonical uppercase form.

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=str(parsed))


@dataclass(frozen=True)
class UserId:
    """Identifier for a User.

    Users are provisioned by the upstream identity provider, so the value
    is an opaque string rather than a ULID.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))


class OrgRole(StrEnum):
    """Role a user holds within an organization.

    Rate card items may target a role instead of a specific user.
    """

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    HR = "HR"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    MEMBER = "MEMBER"
    CONTRACTOR = "CONTRACTOR"
    VIEWER = "VIEWER"
