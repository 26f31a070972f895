"""Unit tests for RateService."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, create_autospec

import pytest

from iam.domain.value_objects import OrgRole
from pricing.application.services import RateResolution, RateService, RuleResolver
from pricing.domain.resolution import Resolved, Unresolved, UnresolvedReason
from pricing.domain.value_objects import RateCardKey, RuleSetId

AS_OF = datetime(2024, 3, 15, tzinfo=UTC)


@pytest.fixture
def mock_resolver():
    resolver = create_autospec(RuleResolver, instance=True)
    resolver.resolve = AsyncMock()
    return resolver


@pytest.fixture
def service(mock_resolver):
    return RateService(resolver=mock_resolver)


class TestResolveRate:
    """Tests for RateService.resolve_rate."""

    @pytest.mark.asyncio
    async def test_builds_key_and_context(self, service, mock_resolver, tenant_id):
        mock_resolver.resolve.return_value = Unresolved(
            reason=UnresolvedReason.NO_ACTIVE_RULE_SET
        )

        await service.resolve_rate(
            tenant_id,
            rate_card_id="01J0000000000000000000CARD",
            user_id="u1",
            role=OrgRole.PROJECT_MANAGER,
            as_of=AS_OF,
        )

        called_tenant, key, context = mock_resolver.resolve.call_args[0]
        assert called_tenant == tenant_id
        assert key == RateCardKey(rate_card_id=RuleSetId("01J0000000000000000000CARD"))
        assert context.as_of == AS_OF
        assert context.requesting_user_id == "u1"
        assert context.requesting_role == OrgRole.PROJECT_MANAGER
        assert context.quantity is None

    @pytest.mark.asyncio
    async def test_blank_rate_card_id_selects_default(
        self, service, mock_resolver, tenant_id
    ):
        mock_resolver.resolve.return_value = Unresolved(
            reason=UnresolvedReason.NO_ACTIVE_RULE_SET
        )

        await service.resolve_rate(tenant_id, rate_card_id="")

        key = mock_resolver.resolve.call_args[0][1]
        assert key == RateCardKey()

    @pytest.mark.asyncio
    async def test_unresolved_passes_through(self, service, mock_resolver, tenant_id):
        unresolved = Unresolved(reason=UnresolvedReason.NO_CANDIDATE_MATCHES_CONTEXT)
        mock_resolver.resolve.return_value = unresolved

        assert await service.resolve_rate(tenant_id) is unresolved

    @pytest.mark.asyncio
    async def test_resolved_rate_is_rounded(
        self, service, mock_resolver, make_rule_set, make_candidate, tenant_id
    ):
        candidate = make_candidate(amount="42.125", product_id="p9")
        rule_set = make_rule_set([candidate], currency="GBP")
        mock_resolver.resolve.return_value = Resolved(
            rule_set=rule_set,
            candidate=candidate,
            derived_amount=candidate.amount,
            score=0,
        )

        result = await service.resolve_rate(tenant_id, as_of=AS_OF)

        assert result == RateResolution(
            rate_card_id=rule_set.id.value,
            currency="GBP",
            unit_id=candidate.unit.id,
            unit_label="Hour",
            unit_price=Decimal("42.13"),
            product_id="p9",
            item_id=candidate.id.value,
        )
