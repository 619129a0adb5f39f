"""Resident Service - cohort queries for billing generation"""

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing import Billing, BillingResidentLink
from app.models.user import User, Role, user_roles


class ResidentService:
    @staticmethod
    def _with_role(role: str):
        return (
            select(User)
            .join(user_roles, user_roles.c.user_id == User.id)
            .join(Role, Role.id == user_roles.c.role_id)
            .where(Role.type == role)
            .distinct()
        )

    @staticmethod
    async def residents_with_role(db: AsyncSession, role: str) -> List[User]:
        result = await db.execute(ResidentService._with_role(role).order_by(User.id))
        return list(result.scalars().all())

    @staticmethod
    async def residents_with_role_unbilled(
        db: AsyncSession,
        role: str,
        month: int,
        year: int,
    ) -> List[User]:
        """Residents holding `role` with no billing at all for (month, year)."""
        billed = (
            select(BillingResidentLink.user_id)
            .join(Billing, Billing.id == BillingResidentLink.billing_id)
            .where(Billing.month == month, Billing.year == year)
        )
        result = await db.execute(
            ResidentService._with_role(role)
            .where(User.id.not_in(billed))
            .order_by(User.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def residents_by_ids(db: AsyncSession, user_ids: Sequence[int], role: str) -> List[User]:
        """
        Residents among `user_ids`, in request order. Ids that do not exist
        or do not hold the role are dropped.
        """
        if not user_ids:
            return []
        result = await db.execute(
            ResidentService._with_role(role).where(User.id.in_(list(user_ids)))
        )
        found = {user.id: user for user in result.scalars().all()}
        ordered = []
        seen = set()
        for user_id in user_ids:
            if user_id in found and user_id not in seen:
                ordered.append(found[user_id])
                seen.add(user_id)
        return ordered
