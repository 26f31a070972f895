"""Pydantic models for pricing API requests and responses.

JSON field names are camelCase on the wire. Monetary values are rendered
as decimal strings with exactly two places so no amount ever passes
through a binary float on the way out.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from iam.domain.value_objects import OrgRole
from pricing.application.services import RateResolution
from pricing.domain.quote import PriceQuote, format_money
from pricing.domain.value_objects import ShipTo


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Response body for every client or server error."""

    error: str = Field(..., description="Human-readable error message")


class ResolveRateRequest(CamelModel):
    """Request model for resolving a billing rate."""

    role: OrgRole | None = Field(default=None, description="Role to resolve for")
    user_id: str | None = Field(default=None, description="User to resolve for")
    rate_card_id: str | None = Field(
        default=None, description="Explicit rate card (defaults to the active default)"
    )
    as_of: datetime | None = Field(
        default=None, description="Instant to evaluate validity at (defaults to now)"
    )

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: object) -> object:
        """Accept role names in any case."""
        if isinstance(value, str):
            return value.strip().upper() or None
        return value


class ResolveRateResponse(CamelModel):
    """Response model for a resolved billing rate."""

    ok: bool = True
    rate_card_id: str
    currency: str
    unit_id: str
    unit_label: str
    unit_price: str
    product_id: str | None = None

    @classmethod
    def from_domain(cls, rate: RateResolution) -> ResolveRateResponse:
        """Convert a RateResolution to an API response.

        Args:
            rate: Resolved rate card entry

        Returns:
            ResolveRateResponse
        """
        return cls(
            rate_card_id=rate.rate_card_id,
            currency=rate.currency,
            unit_id=rate.unit_id,
            unit_label=rate.unit_label,
            unit_price=format_money(rate.unit_price),
            product_id=rate.product_id,
        )


class ShipToModel(CamelModel):
    """Shipping destination; accepted and logged, never matched."""

    country: str | None = None
    region: str | None = None
    postal: str | None = None

    def to_domain(self) -> ShipTo:
        return ShipTo(country=self.country, region=self.region, postal=self.postal)


class QuoteRequest(CamelModel):
    """Request model for a catalog price quote."""

    product_id: str = Field(..., description="Product to price", min_length=1)
    variant_id: str | None = Field(default=None, description="Optional variant")
    price_book_id: str | None = Field(
        default=None, description="Explicit price book (defaults to the active default)"
    )
    unit_id: str | None = Field(default=None, description="Unit the price must use")
    quantity: Decimal | None = Field(
        default=None, description="Requested quantity (defaults to 1)"
    )
    as_of: datetime | None = Field(
        default=None, description="Instant to evaluate validity at (defaults to now)"
    )
    ship_to: ShipToModel | None = None


class QuoteResponse(CamelModel):
    """Response model for a catalog price quote."""

    ok: bool = True
    unit_price: str
    currency: str
    unit_label: str
    product_id: str
    variant_id: str | None = None
    price_book_id: str
    unit_id: str
    quantity: str
    line_subtotal: str

    @classmethod
    def from_domain(cls, quote: PriceQuote) -> QuoteResponse:
        """Convert a PriceQuote to an API response.

        Args:
            quote: Assembled price quote

        Returns:
            QuoteResponse
        """
        return cls(
            unit_price=format_money(quote.unit_price),
            currency=quote.currency,
            unit_label=quote.unit_label,
            product_id=quote.product_id,
            variant_id=quote.variant_id,
            price_book_id=quote.price_book_id,
            unit_id=quote.unit_id,
            quantity=f"{quote.quantity:f}",
            line_subtotal=format_money(quote.line_subtotal),
        )
