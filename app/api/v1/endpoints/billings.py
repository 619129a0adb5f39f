from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.enums import BillingKind
from app.schemas.billing import (
    BatchResult,
    BulkBillingRequest,
    BulkCustomBillingRequest,
    ConfirmPaymentRequest,
    PaymentWebhookPayload,
    ReconcileResult,
)
from app.schemas.responses import SuccessResponse
from app.services.billing_factory import BillingPeriod
from app.services.billing_service import BillingService
from app.services.reconciliation_service import ReconciliationService

router = APIRouter()


def _batch_message(result: BatchResult) -> str:
    if result.failure_count:
        return "Billing batch rolled back"
    if not result.total_billings:
        return "No billings to create"
    return "Billings created successfully"


@router.post("/bulk-monthly", response_model=SuccessResponse[BatchResult])
async def create_bulk_monthly_billings(
    request_in: BulkBillingRequest,
    actor_id: int = Depends(deps.get_actor_id),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Bill residents for every active monthly definition.
    Without user_ids, every resident not yet billed for the month is billed.
    """
    result = await BillingService.generate_batch(
        db,
        BillingKind.MONTHLY,
        BillingPeriod(request_in.month, request_in.year),
        actor_id,
        resident_ids=request_in.user_ids or None,
    )
    return SuccessResponse(data=result, message=_batch_message(result))


@router.post("/bulk-custom", response_model=SuccessResponse[BatchResult])
async def create_bulk_custom_billings(
    request_in: BulkCustomBillingRequest,
    actor_id: int = Depends(deps.get_actor_id),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Bill residents for one custom definition (billing_settings_id).
    """
    result = await BillingService.generate_batch(
        db,
        BillingKind.CUSTOM,
        BillingPeriod(request_in.month, request_in.year),
        actor_id,
        resident_ids=request_in.user_ids or None,
        definition_id=request_in.billing_settings_id,
    )
    return SuccessResponse(data=result, message=_batch_message(result))


@router.post("/confirm-payment", response_model=SuccessResponse[ReconcileResult])
async def confirm_payment_webhook(
    payload: PaymentWebhookPayload,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Payment provider callback. The description carries the billing ids
    the payment link was issued for; each is marked paid.
    """
    result = await ReconciliationService.reconcile_webhook(db, payload.correlation_text)
    return SuccessResponse(data=result, message="Payment confirmed")


@router.post("/confirm-single", response_model=SuccessResponse[ReconcileResult])
async def confirm_single_payment(
    request_in: ConfirmPaymentRequest,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Mark one billing paid by hand (cash or transfer outside the provider)."""
    confirmed = await ReconciliationService.confirm_payment(db, [request_in.billing_id])
    if not confirmed:
        return SuccessResponse(
            data=ReconcileResult(confirmed_ids=[], unmatched_ids=[request_in.billing_id]),
            message="Billing has no status to update",
        )
    return SuccessResponse(data=ReconcileResult(confirmed_ids=confirmed), message="Payment confirmed")
