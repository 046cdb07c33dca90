from .catalog_repository import BoatRepository, ExtraPackRepository
from .promotion_repository import GiftCardRepository, DiscountCodeRepository

__all__ = [
    'BoatRepository',
    'ExtraPackRepository',
    'GiftCardRepository',
    'DiscountCodeRepository',
]
