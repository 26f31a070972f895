"""SQLAlchemy ORM models for the pricing bounded context.

These models map to database tables and are used by repository implementations.
"""

from pricing.infrastructure.models.price_book import PriceBookEntryModel, PriceBookModel
from pricing.infrastructure.models.rate_card import RateCardItemModel, RateCardModel
from pricing.infrastructure.models.unit import UnitModel

__all__ = [
    "PriceBookEntryModel",
    "PriceBookModel",
    "RateCardItemModel",
    "RateCardModel",
    "UnitModel",
]
