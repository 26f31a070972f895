"""Observability for the pricing application layer."""

from pricing.application.observability.resolution_service_probe import (
    DefaultResolutionServiceProbe,
    ResolutionServiceProbe,
)

__all__ = [
    "DefaultResolutionServiceProbe",
    "ResolutionServiceProbe",
]
