"""Application layer for the pricing bounded context."""
