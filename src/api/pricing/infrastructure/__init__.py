"""Infrastructure layer for the pricing bounded context."""

from pricing.infrastructure.price_book_repository import PriceBookRepository
from pricing.infrastructure.rate_card_repository import RateCardRepository

__all__ = [
    "PriceBookRepository",
    "RateCardRepository",
]
