"""Rule set and candidate entities for the pricing domain.

Both are read-only snapshots: the engine never mutates rule data. Rule
sets are owned by the administration surface and loaded per resolution
call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from pricing.domain.value_objects import (
    CandidateId,
    QuantityTier,
    RuleSetId,
    RuleSetKind,
    Scope,
    UnitRef,
    ValidityWindow,
)


@dataclass(frozen=True)
class Candidate:
    """One scoped, time-bounded rate or price rule.

    The amount is currency-agnostic; the owning RuleSet carries the currency.

    Attributes:
        id: Candidate identifier (rate card item or price book entry id)
        scope: Who the rule targets
        window: Half-open validity window
        amount: Unit amount at full stored precision
        unit: Unit of measure the amount is expressed in
        created_at: Row creation time
        updated_at: Row last-update time, used for tie-breaking
        product_id: Associated product, if any
        variant_id: Associated product variant (price books only)
        tier: Quantity bounds (price books only)
        owner_label: Display name of the targeted user for UserScope rules
    """

    id: CandidateId
    scope: Scope
    window: ValidityWindow
    amount: Decimal
    unit: UnitRef
    created_at: datetime
    updated_at: datetime
    product_id: str | None = None
    variant_id: str | None = None
    tier: QuantityTier | None = None
    owner_label: str | None = None


@dataclass(frozen=True)
class RuleSet:
    """An ordered collection of candidates for one key within one tenant.

    Tenant ownership is fixed at load time; the repository that builds a
    RuleSet only returns rows whose tenant matches the one it was asked for.
    """

    id: RuleSetId
    tenant_id: str
    kind: RuleSetKind
    name: str
    currency: str
    is_active: bool
    is_default: bool
    updated_at: datetime
    candidates: tuple[Candidate, ...] = field(default_factory=tuple)

    def with_candidates(self, candidates: list[Candidate]) -> RuleSet:
        """Return a copy of this rule set holding ``candidates``."""
        return RuleSet(
            id=self.id,
            tenant_id=self.tenant_id,
            kind=self.kind,
            name=self.name,
            currency=self.currency,
            is_active=self.is_active,
            is_default=self.is_default,
            updated_at=self.updated_at,
            candidates=tuple(candidates),
        )
