"""Repository protocols (ports) for the pricing bounded context.

The rule store is read-only from the engine's point of view. One
implementation exists per rule-set kind (rate cards, price books); both
honour the same contract so the resolver can treat them alike.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pricing.domain.entities import Candidate, RuleSet
from pricing.domain.value_objects import RuleSetId, RuleSetKind


@runtime_checkable
class IRuleSetRepository(Protocol):
    """Tenant-scoped, read-only access to rule sets and their candidates.

    Every query filters on the tenant passed in; a rule set belonging to a
    different tenant is never returned, even when its raw id is known.
    """

    @property
    def kind(self) -> RuleSetKind:
        """The kind of rule set this repository serves."""
        ...

    async def get_active_default(self, tenant_id: str) -> RuleSet | None:
        """Return the tenant's active default rule set.

        Selects rows with ``is_active`` and ``is_default`` set; when several
        qualify, the most recently updated wins.

        Args:
            tenant_id: The owning tenant

        Returns:
            The rule set without candidates, or None if none qualifies
        """
        ...

    async def get_by_id(self, tenant_id: str, rule_set_id: RuleSetId) -> RuleSet | None:
        """Return an active rule set by id within a tenant.

        Args:
            tenant_id: The owning tenant
            rule_set_id: The requested rule set

        Returns:
            The rule set without candidates, or None if it does not exist,
            is inactive, or belongs to another tenant
        """
        ...

    async def get_candidates(
        self,
        rule_set_id: RuleSetId,
        *,
        product_id: str | None = None,
        variant_id: str | None = None,
    ) -> list[Candidate]:
        """Return the candidates of a rule set.

        Units and targeted users are resolved in the same query so callers
        need no secondary lookups.

        Args:
            rule_set_id: The rule set to load
            product_id: Narrow to product-level rows for this product
            variant_id: Also include rows for this variant

        Returns:
            Candidates in storage order (order carries no meaning)
        """
        ...
