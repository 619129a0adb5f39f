"""Reconciliation Service - marks billings paid from provider webhooks"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ParseError, PersistenceError, ValidationError
from app.models.billing import BillingStatusLink
from app.models.enums import ReconcileState
from app.schemas.billing import ReconcileResult
from app.services.correlation_codec import CorrelationCodec, default_codec

logger = logging.getLogger(__name__)


class ReconciliationService:
    @staticmethod
    async def confirm_payment(
        db: AsyncSession,
        billing_ids: Sequence[int],
        paid_status_id: Optional[int] = None,
    ) -> List[int]:
        """
        Point every billing's status link at the paid status, one UPDATE per
        id, in a single transaction. Returns the ids whose link was found.
        Re-applying is harmless: Paid -> Paid changes nothing.
        """
        if not billing_ids:
            raise ValidationError("billing_ids cannot be empty")
        paid_status_id = paid_status_id or settings.PAID_STATUS_ID

        matched: List[int] = []
        try:
            for billing_id in billing_ids:
                result = await db.execute(
                    update(BillingStatusLink)
                    .where(BillingStatusLink.billing_id == billing_id)
                    .values(status_id=paid_status_id)
                )
                if result.rowcount:
                    matched.append(billing_id)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.exception("Payment confirmation rolled back", extra={"billing_ids": list(billing_ids)})
            raise PersistenceError(
                f"Failed to update billing status links: {e}",
                {"billing_ids": list(billing_ids)},
            ) from e

        unmatched = [billing_id for billing_id in billing_ids if billing_id not in matched]
        if unmatched:
            logger.warning("No status link for billing ids %s", unmatched)
        return matched

    @staticmethod
    async def reconcile_webhook(
        db: AsyncSession,
        raw_description: Optional[str],
        codec: CorrelationCodec = default_codec,
    ) -> ReconcileResult:
        """Decode the correlation text and mark the referenced billings paid."""
        logger.info("Payment webhook %s", ReconcileState.RECEIVED.value, extra={"description": raw_description})

        try:
            billing_ids = codec.decode(raw_description)
        except ParseError:
            logger.warning(
                "Payment webhook %s", ReconcileState.REJECTED_PARSE.value,
                extra={"description": raw_description},
            )
            raise
        logger.info("Payment webhook %s", ReconcileState.DECODED.value, extra={"billing_ids": billing_ids})

        logger.info("Payment webhook %s", ReconcileState.RECONCILING.value, extra={"billing_ids": billing_ids})
        try:
            confirmed = await ReconciliationService.confirm_payment(db, billing_ids)
        except PersistenceError:
            logger.error("Payment webhook %s", ReconcileState.REJECTED_DB.value, extra={"billing_ids": billing_ids})
            raise

        logger.info(
            "Payment webhook %s", ReconcileState.COMMITTED.value,
            extra={"billing_ids": billing_ids, "confirmed_ids": confirmed},
        )
        return ReconcileResult(
            confirmed_ids=confirmed,
            unmatched_ids=[billing_id for billing_id in billing_ids if billing_id not in confirmed],
        )
