from datetime import datetime
from decimal import Decimal
from typing import Optional

from boat_rental.database.models import (
    DiscountCode, GiftCard, GiftCardPaymentStatus, GiftCardStatus
)
from boat_rental.database.repositories.base import BaseRepository


class GiftCardRepository(BaseRepository):
    """Репозиторий подарочных карт"""

    async def get_by_code(self, code: str) -> Optional[GiftCard]:
        return await self._get_one(GiftCard, GiftCard.code == code.upper())

    async def create(
        self,
        code: str,
        amount: Decimal,
        expires_at: datetime,
        remaining_amount: Optional[Decimal] = None,
        recipient_name: Optional[str] = None,
        status: GiftCardStatus = GiftCardStatus.active,
        payment_status: GiftCardPaymentStatus = GiftCardPaymentStatus.completed
    ) -> GiftCard:
        return await self._create(
            GiftCard,
            code=code.upper(),
            amount=amount,
            remaining_amount=amount if remaining_amount is None else remaining_amount,
            recipient_name=recipient_name,
            status=status,
            payment_status=payment_status,
            expires_at=expires_at,
        )


class DiscountCodeRepository(BaseRepository):
    """Репозиторий кодов скидки"""

    async def get_by_code(self, code: str) -> Optional[DiscountCode]:
        return await self._get_one(DiscountCode, DiscountCode.code == code.upper())

    async def create(
        self,
        code: str,
        discount_percent: int,
        max_uses: int = 1,
        current_uses: int = 0,
        is_active: bool = True,
        expires_at: Optional[datetime] = None
    ) -> DiscountCode:
        if not 1 <= discount_percent <= 100:
            raise ValueError('Процент скидки должен быть от 1 до 100')

        return await self._create(
            DiscountCode,
            code=code.upper(),
            discount_percent=discount_percent,
            max_uses=max_uses,
            current_uses=current_uses,
            is_active=is_active,
            expires_at=expires_at,
        )
