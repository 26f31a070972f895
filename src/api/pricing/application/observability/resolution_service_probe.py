"""Protocol for pricing application service observability.

Defines the interface for domain probes that capture application-level
domain events while rates and quotes are resolved.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from pricing.domain.value_objects import ShipTo
    from shared_kernel.observability_context import ObservationContext


class ResolutionServiceProbe(Protocol):
    """Domain probe for rate and price resolution operations."""

    def rule_set_selected(
        self, kind: str, rule_set_id: str, tenant_id: str, explicit: bool
    ) -> None:
        """Record which rule set a resolution will run against."""
        ...

    def candidate_resolved(
        self, kind: str, rule_set_id: str, candidate_id: str, score: int
    ) -> None:
        """Record that a single candidate won."""
        ...

    def resolution_unresolved(
        self, kind: str, tenant_id: str, reason: str, rule_set_id: str | None
    ) -> None:
        """Record that resolution produced no winner."""
        ...

    def quote_assembled(
        self,
        product_id: str,
        price_book_id: str,
        quantity: Decimal,
        line_subtotal: Decimal,
        ship_to: ShipTo | None,
    ) -> None:
        """Record that a price quote was built."""
        ...

    def quantity_rejected(self, product_id: str, quantity: Decimal, limit: Decimal) -> None:
        """Record that a quote request exceeded the quantity limit."""
        ...

    def request_failed(self, operation: str, error: Exception) -> None:
        """Record that a pricing request failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> ResolutionServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultResolutionServiceProbe:
    """Default implementation of ResolutionServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultResolutionServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultResolutionServiceProbe(logger=self._logger, context=context)

    def rule_set_selected(
        self, kind: str, rule_set_id: str, tenant_id: str, explicit: bool
    ) -> None:
        """Record which rule set a resolution will run against."""
        self._logger.debug(
            "rule_set_selected",
            kind=kind,
            rule_set_id=rule_set_id,
            tenant_id=tenant_id,
            explicit=explicit,
            **self._get_context_kwargs(),
        )

    def candidate_resolved(
        self, kind: str, rule_set_id: str, candidate_id: str, score: int
    ) -> None:
        """Record that a single candidate won."""
        self._logger.info(
            "candidate_resolved",
            kind=kind,
            rule_set_id=rule_set_id,
            candidate_id=candidate_id,
            score=score,
            **self._get_context_kwargs(),
        )

    def resolution_unresolved(
        self, kind: str, tenant_id: str, reason: str, rule_set_id: str | None
    ) -> None:
        """Record that resolution produced no winner."""
        self._logger.info(
            "resolution_unresolved",
            kind=kind,
            tenant_id=tenant_id,
            reason=reason,
            rule_set_id=rule_set_id,
            **self._get_context_kwargs(),
        )

    def quote_assembled(
        self,
        product_id: str,
        price_book_id: str,
        quantity: Decimal,
        line_subtotal: Decimal,
        ship_to: ShipTo | None,
    ) -> None:
        """Record that a price quote was built."""
        self._logger.info(
            "quote_assembled",
            product_id=product_id,
            price_book_id=price_book_id,
            quantity=str(quantity),
            line_subtotal=str(line_subtotal),
            ship_to_country=ship_to.country if ship_to else None,
            ship_to_region=ship_to.region if ship_to else None,
            **self._get_context_kwargs(),
        )

    def quantity_rejected(self, product_id: str, quantity: Decimal, limit: Decimal) -> None:
        """Record that a quote request exceeded the quantity limit."""
        self._logger.warning(
            "quote_quantity_rejected",
            product_id=product_id,
            quantity=str(quantity),
            limit=str(limit),
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: Exception) -> None:
        """Record that a pricing request failed unexpectedly."""
        self._logger.error(
            "pricing_request_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
