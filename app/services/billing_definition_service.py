"""Billing Definition Service - read access to billing templates"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing import BillingDefinition
from app.models.enums import BillingKind


class BillingDefinitionService:
    @staticmethod
    async def active_monthly_definitions(db: AsyncSession) -> List[BillingDefinition]:
        result = await db.execute(
            select(BillingDefinition)
            .where(
                BillingDefinition.kind == BillingKind.MONTHLY,
                BillingDefinition.is_active.is_(True),
                BillingDefinition.published_at.isnot(None),
            )
            .order_by(BillingDefinition.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def definition_by_id(db: AsyncSession, definition_id: int) -> Optional[BillingDefinition]:
        result = await db.execute(
            select(BillingDefinition).where(BillingDefinition.id == definition_id)
        )
        return result.scalar_one_or_none()
