"""Unit tests for pricing value objects."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from iam.domain.value_objects import OrgRole
from pricing.domain.value_objects import (
    PriceBookKey,
    QuantityTier,
    RateCardKey,
    RoleScope,
    RuleSetId,
    RuleSetKind,
    Unscoped,
    UserScope,
    ValidityWindow,
    ensure_utc,
    scope_from_columns,
)


class TestScopeFromColumns:
    """Tests for mapping stored user/role columns to a Scope."""

    def test_user_column_gives_user_scope(self):
        assert scope_from_columns("u1", None) == UserScope(user_id="u1")

    def test_role_column_gives_role_scope(self):
        assert scope_from_columns(None, "ADMIN") == RoleScope(role=OrgRole.ADMIN)

    def test_no_columns_gives_unscoped(self):
        assert scope_from_columns(None, None) == Unscoped()

    def test_empty_strings_are_unscoped(self):
        assert scope_from_columns("", "") == Unscoped()

    def test_user_takes_precedence_over_role(self):
        """A row targeting both is treated as user-specific."""
        assert scope_from_columns("u1", "ADMIN") == UserScope(user_id="u1")

    def test_unknown_role_raises(self):
        with pytest.raises(ValueError):
            scope_from_columns(None, "SUPERHERO")


class TestValidityWindow:
    """Tests for the half-open validity window."""

    def test_contains_is_half_open(self):
        window = ValidityWindow(
            valid_from=datetime(2024, 1, 1, tzinfo=UTC),
            valid_to=datetime(2024, 6, 1, tzinfo=UTC),
        )

        assert window.contains(datetime(2024, 1, 1, tzinfo=UTC))
        assert window.contains(datetime(2024, 5, 31, tzinfo=UTC))
        assert not window.contains(datetime(2024, 6, 1, tzinfo=UTC))
        assert not window.contains(datetime(2023, 12, 31, tzinfo=UTC))

    def test_naive_bounds_are_utc(self):
        window = ValidityWindow(valid_from=datetime(2024, 1, 1))

        assert window.valid_from == datetime(2024, 1, 1, tzinfo=UTC)

    def test_compares_across_offsets(self):
        """An instant given in another offset is compared as UTC."""
        window = ValidityWindow(valid_to=datetime(2024, 6, 1, tzinfo=UTC))
        minus_five = timezone(timedelta(hours=-5))

        # 2024-05-31T20:00-05:00 is 2024-06-01T01:00Z
        assert not window.contains(datetime(2024, 5, 31, 20, 0, tzinfo=minus_five))


class TestEnsureUtc:
    def test_naive_gets_utc(self):
        assert ensure_utc(datetime(2024, 1, 1)).tzinfo == UTC

    def test_aware_is_converted(self):
        plus_one = timezone(timedelta(hours=1))
        converted = ensure_utc(datetime(2024, 1, 1, 1, 0, tzinfo=plus_one))

        assert converted == datetime(2024, 1, 1, 0, 0, tzinfo=UTC)


class TestQuantityTier:
    """Tests for inclusive quantity tiers."""

    def test_admits_within_bounds(self):
        tier = QuantityTier(min_qty=Decimal("5"), max_qty=Decimal("10"))

        assert tier.admits(Decimal("5"))
        assert tier.admits(Decimal("10"))
        assert not tier.admits(Decimal("4.99"))
        assert not tier.admits(Decimal("10.01"))

    def test_open_bounds(self):
        assert QuantityTier(min_qty=Decimal("5")).admits(Decimal("1000000"))
        assert QuantityTier(max_qty=Decimal("5")).admits(Decimal("0.5"))

    def test_floor_defaults_to_zero(self):
        assert QuantityTier().floor == Decimal(0)
        assert QuantityTier(min_qty=Decimal("3")).floor == Decimal("3")


class TestResolutionKeys:
    def test_rate_card_key(self):
        rate_card_id = RuleSetId.generate()
        key = RateCardKey(rate_card_id=rate_card_id)

        assert key.kind == RuleSetKind.RATE_CARD
        assert key.rule_set_id == rate_card_id

    def test_price_book_key_defaults(self):
        key = PriceBookKey(product_id="p1")

        assert key.kind == RuleSetKind.PRICE_BOOK
        assert key.rule_set_id is None
        assert key.variant_id is None
        assert key.unit_id is None


class TestRuleSetId:
    def test_generate_creates_unique_ulids(self):
        first = RuleSetId.generate()
        second = RuleSetId.generate()

        assert first != second
        assert len(first.value) == 26

    def test_str_returns_value(self):
        assert str(RuleSetId(value="abc")) == "abc"
