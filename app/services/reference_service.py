"""Default status and category ids used when generating billings."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import NotFoundError
from app.models.reference import GeneralStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingDefaults:
    unpaid_status_id: int
    paid_status_id: int
    category_id: int


class ReferenceService:
    """Resolves BillingDefaults once; callers hold on to the result."""

    @staticmethod
    async def get_status_by_name(db: AsyncSession, name: str) -> Optional[GeneralStatus]:
        result = await db.execute(
            select(GeneralStatus)
            .where(GeneralStatus.name == name, GeneralStatus.published_at.isnot(None))
            .order_by(GeneralStatus.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_first_published_status(db: AsyncSession) -> Optional[GeneralStatus]:
        result = await db.execute(
            select(GeneralStatus)
            .where(GeneralStatus.published_at.isnot(None))
            .order_by(GeneralStatus.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def resolve_defaults(db: AsyncSession) -> BillingDefaults:
        """
        Unpaid status: UNPAID_STATUS_ID when configured, otherwise the first
        published status named UNPAID_STATUS_NAME, otherwise the first
        published status at all.
        """
        unpaid_status_id = settings.UNPAID_STATUS_ID
        if unpaid_status_id is None:
            status = await ReferenceService.get_status_by_name(db, settings.UNPAID_STATUS_NAME)
            if status is None:
                status = await ReferenceService.get_first_published_status(db)
                if status is None:
                    raise NotFoundError("No published billing status found")
                logger.warning(
                    "Unpaid status %r not found, falling back to status %s (%s)",
                    settings.UNPAID_STATUS_NAME,
                    status.id,
                    status.name,
                )
            unpaid_status_id = status.id

        defaults = BillingDefaults(
            unpaid_status_id=unpaid_status_id,
            paid_status_id=settings.PAID_STATUS_ID,
            category_id=settings.DEFAULT_CATEGORY_ID,
        )
        logger.info(
            "Billing defaults resolved",
            extra={
                "unpaid_status_id": defaults.unpaid_status_id,
                "paid_status_id": defaults.paid_status_id,
                "category_id": defaults.category_id,
            },
        )
        return defaults


_defaults: Optional[BillingDefaults] = None


async def get_billing_defaults(db: AsyncSession) -> BillingDefaults:
    """Return the process-wide defaults, resolving them on first use."""
    global _defaults
    if _defaults is None:
        _defaults = await ReferenceService.resolve_defaults(db)
    return _defaults


def set_billing_defaults(defaults: Optional[BillingDefaults]) -> None:
    """Install (or clear, with None) the process-wide defaults."""
    global _defaults
    _defaults = defaults
