"""Quote application service for the pricing bounded context.

Prices a catalog line (product or variant, unit, quantity) against the
tenant's price books.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from iam.domain.value_objects import OrgRole
from infrastructure.settings import PricingSettings, get_pricing_settings
from pricing.application.observability import (
    DefaultResolutionServiceProbe,
    ResolutionServiceProbe,
)
from pricing.application.services.rule_resolver import RuleResolver
from pricing.domain.exceptions import InvalidContextError
from pricing.domain.quote import PriceQuote, assemble_quote
from pricing.domain.resolution import ResolutionContext, Unresolved, UnresolvedReason
from pricing.domain.value_objects import PriceBookKey, RuleSetId, ShipTo


@dataclass(frozen=True)
class QuoteRejected:
    """No price applies to the requested line."""

    reason: UnresolvedReason


class QuoteService:
    """Application service for catalog price quotes.

    Read-only; every call resolves against a fresh snapshot of the
    selected price book.
    """

    def __init__(
        self,
        resolver: RuleResolver,
        settings: PricingSettings | None = None,
        probe: ResolutionServiceProbe | None = None,
    ):
        """Initialize QuoteService with dependencies.

        Args:
            resolver: Resolver bound to the price book store
            settings: Pricing settings (defaults to cached environment settings)
            probe: Optional domain probe for observability
        """
        self._resolver = resolver
        self._settings = settings or get_pricing_settings()
        self._probe = probe or DefaultResolutionServiceProbe()

    async def quote_unit_price(
        self,
        tenant_id: str,
        product_id: str,
        variant_id: str | None = None,
        price_book_id: str | None = None,
        unit_id: str | None = None,
        quantity: Decimal | None = None,
        as_of: datetime | None = None,
        ship_to: ShipTo | None = None,
        requesting_user_id: str | None = None,
        requesting_role: OrgRole | None = None,
    ) -> PriceQuote | QuoteRejected:
        """Quote the unit price and line subtotal for a catalog line.

        Args:
            tenant_id: The tenant whose price books are consulted
            product_id: Product being priced
            variant_id: Optional variant; its entries beat product-level ones
            price_book_id: Explicit price book, or None for the tenant default
            unit_id: Optional unit the price must be expressed in
            quantity: Requested quantity (defaults to the configured default)
            as_of: Instant to evaluate validity at (defaults to now)
            ship_to: Destination, carried for logging only
            requesting_user_id: Caller, for user-scoped entries
            requesting_role: Caller's role, for role-scoped entries

        Returns:
            PriceQuote, or QuoteRejected with the reason

        Raises:
            InvalidContextError: If quantity is not positive and finite, or
                exceeds the configured maximum
        """
        if quantity is None:
            quantity = self._settings.default_quantity

        context = ResolutionContext.at(
            as_of,
            requesting_user_id=requesting_user_id,
            requesting_role=requesting_role,
            quantity=quantity,
            ship_to=ship_to,
        )
        if context.quantity > self._settings.max_quantity:
            self._probe.quantity_rejected(
                product_id, context.quantity, self._settings.max_quantity
            )
            raise InvalidContextError(
                f"Quantity must not exceed {self._settings.max_quantity}"
            )

        key = PriceBookKey(
            product_id=product_id,
            variant_id=variant_id or None,
            unit_id=unit_id or None,
            price_book_id=RuleSetId(value=price_book_id) if price_book_id else None,
        )

        result = await self._resolver.resolve(tenant_id, key, context)
        if isinstance(result, Unresolved):
            return QuoteRejected(reason=result.reason)

        quote = assemble_quote(result, product_id=product_id, quantity=context.quantity)
        self._probe.quote_assembled(
            product_id=quote.product_id,
            price_book_id=quote.price_book_id,
            quantity=quote.quantity,
            line_subtotal=quote.line_subtotal,
            ship_to=ship_to,
        )
        return quote
