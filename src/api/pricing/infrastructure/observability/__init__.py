"""Observability for pricing infrastructure."""

from pricing.infrastructure.observability.repository_probe import (
    DefaultRuleSetRepositoryProbe,
    RuleSetRepositoryProbe,
)

__all__ = [
    "DefaultRuleSetRepositoryProbe",
    "RuleSetRepositoryProbe",
]
