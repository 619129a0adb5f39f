"""Billing Service - batch generation of billings for a resident cohort"""

import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.enums import BillingKind
from app.schemas.billing import BatchResult
from app.services.batch_persister import persist_billing_batch
from app.services.billing_definition_service import BillingDefinitionService
from app.services.billing_factory import BillingPeriod, build_billing_batch
from app.services.reference_service import BillingDefaults, get_billing_defaults
from app.services.resident_service import ResidentService

logger = logging.getLogger(__name__)


class BillingService:
    """Service layer for billing generation"""

    @staticmethod
    async def generate_batch(
        db: AsyncSession,
        kind: BillingKind,
        period: BillingPeriod,
        actor_id: int,
        resident_ids: Optional[Sequence[int]] = None,
        definition_id: Optional[int] = None,
        defaults: Optional[BillingDefaults] = None,
    ) -> BatchResult:
        """
        Generate billings for `period`.

        Monthly uses every active published monthly definition; custom uses
        the single definition `definition_id`. With `resident_ids` only those
        residents are billed (unknown ids are skipped); without, every
        resident not yet billed for the period is.

        Nothing stops a second run for the same cohort and period from
        billing it again; callers own that decision.
        """
        period.validate()

        if kind == BillingKind.MONTHLY:
            definitions = await BillingDefinitionService.active_monthly_definitions(db)
            if not definitions:
                raise NotFoundError("No active monthly billing definitions found")
        else:
            if definition_id is None:
                raise ValidationError("billing_settings_id is required for custom billings")
            definition = await BillingDefinitionService.definition_by_id(db, definition_id)
            if definition is None:
                raise NotFoundError(
                    f"Billing definition {definition_id} not found",
                    {"definition_id": definition_id},
                )
            definitions = [definition]

        if resident_ids:
            residents = await ResidentService.residents_by_ids(
                db, resident_ids, settings.RESIDENT_ROLE_TYPE
            )
            skipped = len(set(resident_ids)) - len(residents)
            if skipped:
                logger.warning("Skipped %d unknown or non-resident user ids", skipped)
        else:
            residents = await ResidentService.residents_with_role_unbilled(
                db, settings.RESIDENT_ROLE_TYPE, period.month, period.year
            )

        if not residents:
            logger.info(
                "No eligible residents for billing",
                extra={"kind": kind.value, "month": period.month, "year": period.year},
            )
            return BatchResult()

        if defaults is None:
            defaults = await get_billing_defaults(db)

        batch = build_billing_batch(
            definitions=definitions,
            resident_ids=[resident.id for resident in residents],
            period=period,
            kind=kind,
            defaults=defaults,
            actor_id=actor_id,
        )
        result = await persist_billing_batch(db, batch)

        logger.info(
            "Billing batch generated",
            extra={
                "kind": kind.value,
                "month": period.month,
                "year": period.year,
                "actor_id": actor_id,
                "total_residents": result.total_residents,
                "total_billings": result.total_billings,
                "success_count": result.success_count,
                "failure_count": result.failure_count,
            },
        )
        return result

    @staticmethod
    async def generate_monthly_for_all(
        db: AsyncSession,
        period: BillingPeriod,
        actor_id: int,
    ) -> BatchResult:
        return await BillingService.generate_batch(db, BillingKind.MONTHLY, period, actor_id)
