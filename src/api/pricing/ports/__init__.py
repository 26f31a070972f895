"""Ports for the pricing bounded context."""

from pricing.ports.exceptions import RuleStoreUnavailableError
from pricing.ports.repositories import IRuleSetRepository

__all__ = [
    "IRuleSetRepository",
    "RuleStoreUnavailableError",
]
