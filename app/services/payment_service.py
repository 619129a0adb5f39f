"""Payment Service - issues provider-hosted payment links for billings"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.billing import Billing, BillingResidentLink
from app.models.payment_config import PaymentConfig
from app.models.user import User
from app.schemas.payment import InvoiceItem, InvoiceRequest, PaymentLinkResult
from app.services.correlation_codec import CorrelationCodec, default_codec
from app.services.fee_calculator import calculate_admin_fee
from app.services.payment_config_service import PaymentConfigService
from app.services.payment_gateway import PaymentGatewayClient
from app.utils.time import get_utc_now, to_iso_utc

logger = logging.getLogger(__name__)


def _unique(ids: Sequence[int]) -> List[int]:
    seen = set()
    out = []
    for billing_id in ids:
        if billing_id not in seen:
            seen.add(billing_id)
            out.append(billing_id)
    return out


class PaymentService:
    @staticmethod
    async def get_billings(db: AsyncSession, billing_ids: Sequence[int]) -> List[Billing]:
        """Load billings in `billing_ids` order; any missing id is NotFoundError."""
        result = await db.execute(
            select(Billing)
            .where(Billing.id.in_(list(billing_ids)))
            .options(selectinload(Billing.resident_link).selectinload(BillingResidentLink.user))
        )
        found = {billing.id: billing for billing in result.scalars().all()}
        missing = [billing_id for billing_id in billing_ids if billing_id not in found]
        if missing:
            raise NotFoundError(
                f"Billing record not found for ID {missing[0]}",
                {"missing_ids": missing},
            )
        return [found[billing_id] for billing_id in billing_ids]

    @staticmethod
    def build_payer(resident: Optional[User], config: Optional[PaymentConfig]) -> dict:
        """Resident contact where present, the configured admin contact otherwise."""
        admin_name = getattr(config, "admin_name", None) or ""
        admin_email = getattr(config, "admin_email", None) or ""
        admin_phone = getattr(config, "admin_phone", None) or ""
        if resident is None:
            return {"name": admin_name, "email": admin_email, "mobile": admin_phone}
        return {
            "name": resident.username or admin_name,
            "email": resident.email or admin_email,
            "mobile": resident.phone or admin_phone,
        }

    @staticmethod
    async def issue_payment_link(
        db: AsyncSession,
        billing_ids: Sequence[int],
        gateway: Optional[PaymentGatewayClient] = None,
        codec: CorrelationCodec = default_codec,
        now: Optional[datetime] = None,
    ) -> PaymentLinkResult:
        """
        Create one provider invoice covering `billing_ids` plus the admin fee.

        The invoice description carries the correlation text the webhook
        later hands back to the reconciler. Nothing is written locally, so
        a failed call leaves no state behind.
        """
        if not billing_ids:
            raise ValidationError("billing_ids cannot be empty")
        ids = _unique(billing_ids)
        if any(billing_id <= 0 for billing_id in ids):
            raise ValidationError("billing_ids must be positive integers", {"billing_ids": ids})

        billings = await PaymentService.get_billings(db, ids)
        for billing in billings:
            if billing.amount is None or billing.amount <= 0:
                raise ValidationError(
                    f"Invalid billing amount for ID {billing.id}",
                    {"billing_id": billing.id, "amount": billing.amount},
                )

        config = await PaymentConfigService.active_pricing_config(db)
        fee = calculate_admin_fee([(b.month, b.year) for b in billings], config)
        billed_total = sum(int(b.amount) for b in billings)

        description = codec.encode(ids, [b.document_id for b in billings])

        items = [
            InvoiceItem(quantity=1, rate=int(b.amount), description=f"{b.name or 'IPL'} {b.month}/{b.year}")
            for b in billings
        ]
        if fee > 0:
            items.append(InvoiceItem(quantity=1, rate=fee, description=settings.PAYMENT_FEE_ITEM_NAME))

        first_link = billings[0].resident_link
        resident = first_link.user if first_link is not None else None
        expires = (now or get_utc_now()) + timedelta(days=settings.PAYMENT_LINK_EXPIRY_DAYS)

        invoice = InvoiceRequest(
            **PaymentService.build_payer(resident, config),
            redirect_url=settings.PAYMENT_REDIRECT_URL,
            description=description,
            expired_at=to_iso_utc(expires),
            items=items,
        )

        gateway = gateway or PaymentGatewayClient()
        created = await gateway.create_invoice(invoice)

        logger.info(
            "Payment link created",
            extra={
                "billing_ids": ids,
                "amount": billed_total + fee,
                "fee": fee,
                "invoice_id": created.id,
            },
        )
        return PaymentLinkResult(
            amount=billed_total + fee,
            fee=fee,
            url=created.link,
            description=description,
            correlation_ids=ids,
            invoice_id=created.id,
            transaction_id=created.transaction_id,
            expired_at=created.expired_at or expires,
        )

    @staticmethod
    async def issue_payment_link_for_billing(
        db: AsyncSession,
        billing_id: int,
        gateway: Optional[PaymentGatewayClient] = None,
        codec: CorrelationCodec = default_codec,
    ) -> PaymentLinkResult:
        return await PaymentService.issue_payment_link(db, [billing_id], gateway=gateway, codec=codec)
