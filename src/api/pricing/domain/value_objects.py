"""Value objects for the pricing domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers, scopes, windows and resolution keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum

from ulid import ULID

from iam.domain.value_objects import OrgRole


@dataclass(frozen=True)
class RuleSetId:
    """Identifier for a rule set (rate card or price book).

    Uses ULID for sortability and distribution-friendly generation. Values
    arriving from callers are treated as opaque and never validated, so a
    malformed id is indistinguishable from an unknown one.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> RuleSetId:
        """Generate a new RuleSetId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class CandidateId:
    """Identifier for a single candidate rule."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> CandidateId:
        """Generate a new CandidateId using ULID."""
        return cls(value=str(ULID()))


class RuleSetKind(StrEnum):
    """The two families of rule sets the engine resolves."""

    RATE_CARD = "rate_card"
    PRICE_BOOK = "price_book"


# --------------------------------------------------------------------------
# Scope: exactly one of user, role or unscoped
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class UserScope:
    """Candidate targets one specific user."""

    user_id: str


@dataclass(frozen=True)
class RoleScope:
    """Candidate targets every user holding a role."""

    role: OrgRole


@dataclass(frozen=True)
class Unscoped:
    """Candidate applies to anyone (the default rule)."""


Scope = UserScope | RoleScope | Unscoped


def scope_from_columns(user_id: str | None, role: str | None) -> Scope:
    """Build a Scope from the nullable user/role columns of a stored row.

    A row carrying both columns is targeted at the user; the role column
    is ignored in that case.

    Raises:
        ValueError: If ``role`` is not a known OrgRole
    """
    if user_id:
        return UserScope(user_id=user_id)
    if role:
        return RoleScope(role=OrgRole(role))
    return Unscoped()


@dataclass(frozen=True)
class UnitRef:
    """Reference to a unit of measure with its display label."""

    id: str
    label: str


def ensure_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime.

    Naive datetimes are interpreted as UTC.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


@dataclass(frozen=True)
class ValidityWindow:
    """Half-open validity interval ``[valid_from, valid_to)``.

    A missing bound is unbounded on that side.
    """

    valid_from: datetime | None = None
    valid_to: datetime | None = None

    def __post_init__(self) -> None:
        if self.valid_from is not None:
            object.__setattr__(self, "valid_from", ensure_utc(self.valid_from))
        if self.valid_to is not None:
            object.__setattr__(self, "valid_to", ensure_utc(self.valid_to))

    def contains(self, instant: datetime) -> bool:
        """Whether ``instant`` falls inside the window."""
        instant = ensure_utc(instant)
        if self.valid_from is not None and instant < self.valid_from:
            return False
        if self.valid_to is not None and instant >= self.valid_to:
            return False
        return True


@dataclass(frozen=True)
class QuantityTier:
    """Inclusive quantity bounds for a price-book entry."""

    min_qty: Decimal | None = None
    max_qty: Decimal | None = None

    def admits(self, quantity: Decimal) -> bool:
        """Whether ``quantity`` lies within the tier."""
        if self.min_qty is not None and quantity < self.min_qty:
            return False
        if self.max_qty is not None and quantity > self.max_qty:
            return False
        return True

    @property
    def floor(self) -> Decimal:
        """Lower bound used to prefer the more specific tier."""
        return self.min_qty if self.min_qty is not None else Decimal(0)


@dataclass(frozen=True)
class ShipTo:
    """Shipping destination carried with a quote request.

    Not matched against candidates; region-scoped rules are not supported.
    """

    country: str | None = None
    region: str | None = None
    postal: str | None = None


# --------------------------------------------------------------------------
# Resolution keys
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class RateCardKey:
    """Selects a rate card, or the tenant's default one when id is None."""

    rate_card_id: RuleSetId | None = None

    @property
    def kind(self) -> RuleSetKind:
        return RuleSetKind.RATE_CARD

    @property
    def rule_set_id(self) -> RuleSetId | None:
        return self.rate_card_id


@dataclass(frozen=True)
class PriceBookKey:
    """Selects price-book entries for a product, variant and unit."""

    product_id: str
    variant_id: str | None = None
    unit_id: str | None = None
    price_book_id: RuleSetId | None = None

    @property
    def kind(self) -> RuleSetKind:
        return RuleSetKind.PRICE_BOOK

    @property
    def rule_set_id(self) -> RuleSetId | None:
        return self.price_book_id


ResolutionKey = RateCardKey | PriceBookKey
