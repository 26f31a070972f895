"""Unit tests for RateCardRepository.

Tests verify tenant scoping, default selection and candidate mapping
with a mocked session.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from iam.domain.value_objects import OrgRole
from pricing.domain.value_objects import (
    RoleScope,
    RuleSetId,
    RuleSetKind,
    Unscoped,
    UserScope,
)
from pricing.infrastructure.models import RateCardItemModel, RateCardModel
from pricing.infrastructure.rate_card_repository import RateCardRepository
from pricing.ports.exceptions import RuleStoreUnavailableError
from pricing.ports.repositories import IRuleSetRepository

STORED_AT = datetime(2024, 2, 1, tzinfo=UTC)


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create repository with mock dependencies."""
    return RateCardRepository(session=mock_session, probe=mock_probe)


@pytest.fixture
def rate_card_model(tenant_id: str) -> RateCardModel:
    return RateCardModel(
        id="01J0000000000000000000CARD",
        tenant_id=tenant_id,
        name="Standard",
        currency="USD",
        is_active=True,
        is_default=True,
        created_at=STORED_AT,
        updated_at=STORED_AT,
    )


def _item(unit_model, **overrides) -> RateCardItemModel:
    values = {
        "id": "01J0000000000000000000ITEM",
        "rate_card_id": "01J0000000000000000000CARD",
        "user_id": None,
        "role": None,
        "unit_id": unit_model.id,
        "product_id": None,
        "unit_price": Decimal("20.000000"),
        "valid_from": None,
        "valid_to": None,
        "created_at": STORED_AT,
        "updated_at": STORED_AT,
    }
    values.update(overrides)
    model = RateCardItemModel(**values)
    model.unit = unit_model
    return model


class TestProtocolCompliance:
    def test_implements_rule_set_repository(self, repository):
        assert isinstance(repository, IRuleSetRepository)

    def test_kind_is_rate_card(self, repository):
        assert repository.kind == RuleSetKind.RATE_CARD


class TestGetActiveDefault:
    """Tests for get_active_default."""

    @pytest.mark.asyncio
    async def test_returns_rule_set_header(
        self, repository, mock_session, query_result, rate_card_model, tenant_id
    ):
        mock_session.execute.return_value = query_result(scalar=rate_card_model)

        rule_set = await repository.get_active_default(tenant_id)

        assert rule_set is not None
        assert rule_set.id == RuleSetId(value=rate_card_model.id)
        assert rule_set.tenant_id == tenant_id
        assert rule_set.kind == RuleSetKind.RATE_CARD
        assert rule_set.currency == "USD"
        assert rule_set.candidates == ()

    @pytest.mark.asyncio
    async def test_filters_on_tenant(
        self, repository, mock_session, query_result, tenant_id
    ):
        mock_session.execute.return_value = query_result(scalar=None)

        await repository.get_active_default(tenant_id)

        stmt = mock_session.execute.call_args[0][0]
        compiled = stmt.compile()
        assert tenant_id in compiled.params.values()
        assert "rate_cards.is_default" in str(compiled)
        assert "ORDER BY rate_cards.updated_at DESC" in str(compiled)

    @pytest.mark.asyncio
    async def test_returns_none_when_no_default(
        self, repository, mock_session, mock_probe, query_result, tenant_id
    ):
        mock_session.execute.return_value = query_result(scalar=None)

        assert await repository.get_active_default(tenant_id) is None
        mock_probe.rule_set_not_found.assert_called_once_with(
            RuleSetKind.RATE_CARD, tenant_id, None
        )

    @pytest.mark.asyncio
    async def test_wraps_driver_errors(
        self, repository, mock_session, mock_probe, tenant_id
    ):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(RuleStoreUnavailableError):
            await repository.get_active_default(tenant_id)

        mock_probe.query_failed.assert_called_once()


class TestGetById:
    """Tests for get_by_id."""

    @pytest.mark.asyncio
    async def test_scopes_lookup_to_tenant(
        self, repository, mock_session, query_result, tenant_id
    ):
        mock_session.execute.return_value = query_result(scalar=None)
        rate_card_id = RuleSetId(value="01J0000000000000000000CARD")

        result = await repository.get_by_id(tenant_id, rate_card_id)

        assert result is None
        params = mock_session.execute.call_args[0][0].compile().params.values()
        assert tenant_id in params
        assert rate_card_id.value in params

    @pytest.mark.asyncio
    async def test_returns_rule_set(
        self, repository, mock_session, mock_probe, query_result, rate_card_model, tenant_id
    ):
        mock_session.execute.return_value = query_result(scalar=rate_card_model)

        result = await repository.get_by_id(tenant_id, RuleSetId(value=rate_card_model.id))

        assert result is not None
        assert result.name == "Standard"
        mock_probe.rule_set_retrieved.assert_called_once_with(
            RuleSetKind.RATE_CARD, rate_card_model.id, tenant_id
        )


class TestGetCandidates:
    """Tests for get_candidates."""

    @pytest.mark.asyncio
    async def test_maps_scopes_and_units(
        self, repository, mock_session, query_result, unit_model, user_model
    ):
        user_item = _item(unit_model, id="I1", user_id="user-1")
        user_item.user = user_model
        role_item = _item(unit_model, id="I2", role="ADMIN")
        default_item = _item(unit_model, id="I3")
        mock_session.execute.return_value = query_result(
            scalars=[user_item, role_item, default_item]
        )

        candidates = await repository.get_candidates(RuleSetId(value="01J0000000000000000000CARD"))

        by_id = {c.id.value: c for c in candidates}
        assert by_id["I1"].scope == UserScope(user_id="user-1")
        assert by_id["I1"].owner_label == "alice"
        assert by_id["I2"].scope == RoleScope(role=OrgRole.ADMIN)
        assert by_id["I3"].scope == Unscoped()
        assert by_id["I3"].unit.label == "Hour"
        assert by_id["I3"].amount == Decimal("20.000000")
        assert by_id["I3"].tier is None

    @pytest.mark.asyncio
    async def test_skips_rows_with_unknown_role(
        self, repository, mock_session, mock_probe, query_result, unit_model
    ):
        mock_session.execute.return_value = query_result(
            scalars=[_item(unit_model, id="BAD", role="INTERN"), _item(unit_model, id="OK")]
        )

        candidates = await repository.get_candidates(RuleSetId(value="01J0000000000000000000CARD"))

        assert [c.id.value for c in candidates] == ["OK"]
        mock_probe.malformed_candidate_skipped.assert_called_once()
        mock_probe.candidates_loaded.assert_called_once_with(
            RuleSetKind.RATE_CARD, "01J0000000000000000000CARD", 1
        )

    @pytest.mark.asyncio
    async def test_narrows_by_product(
        self, repository, mock_session, query_result
    ):
        mock_session.execute.return_value = query_result(scalars=[])

        await repository.get_candidates(
            RuleSetId(value="01J0000000000000000000CARD"), product_id="p1"
        )

        assert "p1" in bound_params_of(mock_session)

    @pytest.mark.asyncio
    async def test_wraps_driver_errors(self, repository, mock_session):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(RuleStoreUnavailableError):
            await repository.get_candidates(RuleSetId(value="01J0000000000000000000CARD"))


def bound_params_of(mock_session) -> list:
    stmt = mock_session.execute.call_args[0][0]
    return list(stmt.compile().params.values())
