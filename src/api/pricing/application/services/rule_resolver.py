"""Rule resolver for the pricing bounded context.

Selects the rule set for a resolution key, loads its candidates and runs
the pure resolution pipeline from ``pricing.domain.resolution``.
"""

from __future__ import annotations

from typing import Any, assert_never

from pricing.application.observability import (
    DefaultResolutionServiceProbe,
    ResolutionServiceProbe,
)
from pricing.domain.resolution import (
    ResolutionContext,
    ResolutionResult,
    Resolved,
    Unresolved,
    UnresolvedReason,
    select_winner,
)
from pricing.domain.value_objects import PriceBookKey, RateCardKey, ResolutionKey
from pricing.ports.repositories import IRuleSetRepository


def _candidate_filter(key: ResolutionKey) -> dict[str, Any]:
    match key:
        case RateCardKey():
            return {}
        case PriceBookKey():
            return {"product_id": key.product_id, "variant_id": key.variant_id}
        case _:
            assert_never(key)


class RuleResolver:
    """Resolves a key to a single winning candidate within one tenant.

    The resolver never retries and never falls back: an explicit rule set
    id that cannot be found is reported as such even when the tenant has
    an active default.
    """

    def __init__(
        self,
        repository: IRuleSetRepository,
        probe: ResolutionServiceProbe | None = None,
    ):
        """Initialize RuleResolver with dependencies.

        Args:
            repository: Rule store for the kind of key being resolved
            probe: Optional domain probe for observability
        """
        self._repository = repository
        self._probe = probe or DefaultResolutionServiceProbe()

    async def resolve(
        self,
        tenant_id: str,
        key: ResolutionKey,
        context: ResolutionContext,
    ) -> ResolutionResult:
        """Resolve ``key`` for ``context`` within a tenant.

        Args:
            tenant_id: The tenant whose rule sets are consulted
            key: Which rule set (and, for price books, which entries)
            context: The validated request context

        Returns:
            Resolved with the winner, or Unresolved with the reason

        Raises:
            ValueError: If the key kind does not match the repository
            RuleStoreUnavailableError: If the rule store cannot be reached
        """
        kind = self._repository.kind
        if key.kind != kind:
            raise ValueError(f"Cannot resolve a {key.kind} key against a {kind} store")

        requested_id = key.rule_set_id
        if requested_id is not None:
            rule_set = await self._repository.get_by_id(tenant_id, requested_id)
            if rule_set is None:
                return self._unresolved(
                    tenant_id, UnresolvedReason.NO_RULE_SET_FOUND, requested_id.value
                )
        else:
            rule_set = await self._repository.get_active_default(tenant_id)
            if rule_set is None:
                return self._unresolved(
                    tenant_id, UnresolvedReason.NO_ACTIVE_RULE_SET, None
                )

        self._probe.rule_set_selected(
            kind=kind,
            rule_set_id=rule_set.id.value,
            tenant_id=tenant_id,
            explicit=requested_id is not None,
        )

        candidates = await self._repository.get_candidates(
            rule_set.id, **_candidate_filter(key)
        )
        result = select_winner(rule_set.with_candidates(candidates), key, context)

        if isinstance(result, Resolved):
            self._probe.candidate_resolved(
                kind=kind,
                rule_set_id=rule_set.id.value,
                candidate_id=result.candidate.id.value,
                score=result.score,
            )
        else:
            self._probe.resolution_unresolved(
                kind=kind,
                tenant_id=tenant_id,
                reason=result.reason,
                rule_set_id=rule_set.id.value,
            )
        return result

    def _unresolved(
        self, tenant_id: str, reason: UnresolvedReason, rule_set_id: str | None
    ) -> Unresolved:
        self._probe.resolution_unresolved(
            kind=self._repository.kind,
            tenant_id=tenant_id,
            reason=reason,
            rule_set_id=rule_set_id,
        )
        return Unresolved(reason=reason)
