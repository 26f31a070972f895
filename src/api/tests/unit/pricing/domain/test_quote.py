"""Unit tests for quote assembly and money rounding."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from pricing.domain.quote import assemble_quote, format_money, to_money
from pricing.domain.resolution import ResolutionContext, Resolved, select_winner
from pricing.domain.value_objects import PriceBookKey, RuleSetKind

AS_OF = datetime(2024, 3, 15, tzinfo=UTC)


class TestMoneyRounding:
    """Tests for half-up rounding to two places."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("10", "10.00"),
            ("0.005", "0.01"),
            ("0.004999", "0.00"),
            ("2.675", "2.68"),
            ("1.125", "1.13"),
            ("-1.125", "-1.13"),
        ],
    )
    def test_rounds_half_up(self, amount, expected):
        assert to_money(Decimal(amount)) == Decimal(expected)
        assert format_money(Decimal(amount)) == expected


class TestAssembleQuote:
    """Tests for assemble_quote."""

    def _resolve(self, make_candidate, make_rule_set, amount, quantity, **kwargs):
        rule_set = make_rule_set(
            [make_candidate(amount=amount, product_id="p1", **kwargs)],
            kind=RuleSetKind.PRICE_BOOK,
            currency="EUR",
        )
        context = ResolutionContext(as_of=AS_OF, quantity=Decimal(quantity))
        result = select_winner(rule_set, PriceBookKey(product_id="p1"), context)
        assert isinstance(result, Resolved)
        return result, context

    def test_ten_times_three_is_thirty(self, make_candidate, make_rule_set):
        resolved, context = self._resolve(
            make_candidate, make_rule_set, "10.00", "3"
        )

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.line_subtotal == Decimal("30.00")
        assert quote.unit_price == Decimal("10.00")
        assert quote.currency == "EUR"
        assert quote.price_book_id == resolved.rule_set.id.value
        assert quote.unit_label == "Hour"

    def test_rounds_the_product_not_the_factors(self, make_candidate, make_rule_set):
        """0.333 x 3 is 0.999, which rounds to 1.00, not 0.33 x 3 = 0.99."""
        resolved, context = self._resolve(
            make_candidate, make_rule_set, "0.333", "3"
        )

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.unit_price == Decimal("0.33")
        assert quote.line_subtotal == Decimal("1.00")

    def test_fractional_quantity(self, make_candidate, make_rule_set):
        resolved, context = self._resolve(
            make_candidate, make_rule_set, "4.10", "2.5"
        )

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.line_subtotal == Decimal("10.25")

    def test_carries_variant_of_winning_entry(self, make_candidate, make_rule_set):
        rule_set = make_rule_set(
            [make_candidate(amount="12.00", variant_id="v1")],
            kind=RuleSetKind.PRICE_BOOK,
        )
        context = ResolutionContext(as_of=AS_OF, quantity=Decimal("1"))
        resolved = select_winner(
            rule_set, PriceBookKey(product_id="p1", variant_id="v1"), context
        )

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.variant_id == "v1"
        assert quote.product_id == "p1"

    def test_long_quantity_is_multiplied_exactly(self, make_candidate, make_rule_set):
        """100000000000.005 x 0.999... is just under .005 past a cent, so .00."""
        quantity = "0." + "9" * 30
        resolved, context = self._resolve(
            make_candidate, make_rule_set, "100000000000.005", quantity
        )

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.line_subtotal == Decimal("100000000000.00")
        assert quote.unit_price == Decimal("100000000000.01")

    def test_subtotal_comes_from_derived_amount(self, make_candidate, make_rule_set):
        resolved, context = self._resolve(make_candidate, make_rule_set, "1.5", "7")

        quote = assemble_quote(resolved, product_id="p1", quantity=context.quantity)

        assert quote.line_subtotal == to_money(resolved.derived_amount)
        assert quote.quantity == Decimal("7")
