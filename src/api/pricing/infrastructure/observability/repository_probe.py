"""Domain probe for rule store repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events while rate cards and price books are loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RuleSetRepositoryProbe(Protocol):
    """Domain probe for rule set repository operations."""

    def rule_set_retrieved(self, kind: str, rule_set_id: str, tenant_id: str) -> None:
        """Record that a rule set was retrieved."""
        ...

    def rule_set_not_found(
        self, kind: str, tenant_id: str, rule_set_id: str | None
    ) -> None:
        """Record that no rule set matched the query."""
        ...

    def candidates_loaded(self, kind: str, rule_set_id: str, count: int) -> None:
        """Record that candidates were loaded for a rule set."""
        ...

    def malformed_candidate_skipped(
        self, kind: str, candidate_id: str, error: str
    ) -> None:
        """Record that a stored row could not be mapped to a candidate."""
        ...

    def query_failed(self, kind: str, operation: str, error: Exception) -> None:
        """Record that a rule store query failed."""
        ...

    def with_context(self, context: ObservationContext) -> RuleSetRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRuleSetRepositoryProbe:
    """Default implementation of RuleSetRepositoryProbe using structlog."""

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
    ) -> DefaultRuleSetRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRuleSetRepositoryProbe(logger=self._logger, context=context)

    def rule_set_retrieved(self, kind: str, rule_set_id: str, tenant_id: str) -> None:
        """Record that a rule set was retrieved."""
        self._logger.debug(
            "rule_set_retrieved",
            kind=kind,
            rule_set_id=rule_set_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def rule_set_not_found(
        self, kind: str, tenant_id: str, rule_set_id: str | None
    ) -> None:
        """Record that no rule set matched the query."""
        self._logger.debug(
            "rule_set_not_found",
            kind=kind,
            tenant_id=tenant_id,
            rule_set_id=rule_set_id,
            **self._get_context_kwargs(),
        )

    def candidates_loaded(self, kind: str, rule_set_id: str, count: int) -> None:
        """Record that candidates were loaded for a rule set."""
        self._logger.debug(
            "rule_set_candidates_loaded",
            kind=kind,
            rule_set_id=rule_set_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def malformed_candidate_skipped(
        self, kind: str, candidate_id: str, error: str
    ) -> None:
        """Record that a stored row could not be mapped to a candidate."""
        self._logger.warning(
            "rule_set_candidate_malformed",
            kind=kind,
            candidate_id=candidate_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def query_failed(self, kind: str, operation: str, error: Exception) -> None:
        """Record that a rule store query failed."""
        self._logger.error(
            "rule_store_query_failed",
            kind=kind,
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
