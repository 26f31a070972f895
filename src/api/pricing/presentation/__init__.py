"""Presentation layer for the pricing bounded context."""
