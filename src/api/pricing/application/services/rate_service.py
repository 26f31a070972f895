"""Rate application service for the pricing bounded context.

Resolves the internal billing rate that applies to a user or role.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from iam.domain.value_objects import OrgRole
from pricing.application.services.rule_resolver import RuleResolver
from pricing.domain.quote import to_money
from pricing.domain.resolution import ResolutionContext, Unresolved
from pricing.domain.value_objects import RateCardKey, RuleSetId


@dataclass(frozen=True)
class RateResolution:
    """The rate card entry that applies to a requester.

    ``unit_price`` is already rounded half-up to two places.
    """

    rate_card_id: str
    currency: str
    unit_id: str
    unit_label: str
    unit_price: Decimal
    product_id: str | None
    item_id: str
    owner_label: str | None = None


class RateService:
    """Application service for rate card resolution."""

    def __init__(self, resolver: RuleResolver):
        """Initialize RateService.

        Args:
            resolver: Resolver bound to the rate card store
        """
        self._resolver = resolver

    async def resolve_rate(
        self,
        tenant_id: str,
        rate_card_id: str | None = None,
        user_id: str | None = None,
        role: OrgRole | None = None,
        as_of: datetime | None = None,
    ) -> RateResolution | Unresolved:
        """Resolve the applicable rate for a user and/or role.

        Args:
            tenant_id: The tenant whose rate cards are consulted
            rate_card_id: Explicit rate card, or None for the tenant default
            user_id: User the rate is requested for
            role: Role the rate is requested for
            as_of: Instant to evaluate validity at (defaults to now)

        Returns:
            RateResolution, or Unresolved with the reason
        """
        context = ResolutionContext.at(
            as_of,
            requesting_user_id=user_id or None,
            requesting_role=role,
        )
        key = RateCardKey(
            rate_card_id=RuleSetId(value=rate_card_id) if rate_card_id else None
        )

        result = await self._resolver.resolve(tenant_id, key, context)
        if isinstance(result, Unresolved):
            return result

        candidate = result.candidate
        return RateResolution(
            rate_card_id=result.rule_set.id.value,
            currency=result.rule_set.currency,
            unit_id=candidate.unit.id,
            unit_label=candidate.unit.label,
            unit_price=to_money(candidate.amount),
            product_id=candidate.product_id,
            item_id=candidate.id.value,
            owner_label=candidate.owner_label,
        )
