"""Quote assembly for the catalog pricing path.

Monetary amounts stay at full precision through the multiplication and
are rounded half-up to two places only when the quote is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from pricing.domain.resolution import Resolved

CENT = Decimal("0.01")


def to_money(amount: Decimal) -> Decimal:
    """Round an amount half-up to exactly two fractional digits."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Render an amount as a two-place decimal string."""
    return f"{to_money(amount):.2f}"


@dataclass(frozen=True)
class PriceQuote:
    """Client-facing quote for a product line."""

    product_id: str
    variant_id: str | None
    price_book_id: str
    currency: str
    unit_id: str
    unit_label: str
    quantity: Decimal
    unit_price: Decimal
    line_subtotal: Decimal


def assemble_quote(resolved: Resolved, product_id: str, quantity: Decimal) -> PriceQuote:
    """Build a quote from a resolved price-book entry.

    Args:
        resolved: The winning candidate and its rule set
        product_id: Product the quote was requested for
        quantity: Requested quantity, echoed on the quote; the line total is
            the resolver's full-precision derived amount

    Returns:
        PriceQuote with unit price and line subtotal rounded half-up
    """
    candidate = resolved.candidate
    return PriceQuote(
        product_id=product_id,
        variant_id=candidate.variant_id,
        price_book_id=resolved.rule_set.id.value,
        currency=resolved.rule_set.currency,
        unit_id=candidate.unit.id,
        unit_label=candidate.unit.label,
        quantity=quantity,
        unit_price=to_money(candidate.amount),
        line_subtotal=to_money(resolved.derived_amount),
    )
