"""Payment Config Service"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.payment_config import PaymentConfig


class PaymentConfigService:
    @staticmethod
    async def active_pricing_config(db: AsyncSession) -> Optional[PaymentConfig]:
        """Most recently published pricing row, or None."""
        result = await db.execute(
            select(PaymentConfig)
            .where(PaymentConfig.published_at.isnot(None))
            .order_by(PaymentConfig.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
