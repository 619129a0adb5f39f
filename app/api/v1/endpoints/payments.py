from typing import Any
from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core.rate_limit import limiter
from app.schemas.payment import PaymentLinkRequest, PaymentLinkResult
from app.schemas.responses import SuccessResponse
from app.services.payment_gateway import PaymentGatewayClient
from app.services.payment_service import PaymentService

router = APIRouter()

_LINK_RATE = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"


@router.post("/billing/link", response_model=SuccessResponse[PaymentLinkResult])
@limiter.limit(_LINK_RATE)
async def create_payment_link(
    request: Request,
    request_in: PaymentLinkRequest,
    gateway: PaymentGatewayClient = Depends(deps.get_payment_gateway),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Create one hosted payment link covering several billings plus the admin fee.
    """
    result = await PaymentService.issue_payment_link(db, request_in.billing_ids, gateway=gateway)
    return SuccessResponse(data=result, message="Payment link created")


@router.post("/billing/{billing_id}/link", response_model=SuccessResponse[PaymentLinkResult])
@limiter.limit(_LINK_RATE)
async def create_single_payment_link(
    request: Request,
    billing_id: int = Path(..., ge=1),
    gateway: PaymentGatewayClient = Depends(deps.get_payment_gateway),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    result = await PaymentService.issue_payment_link_for_billing(db, billing_id, gateway=gateway)
    return SuccessResponse(data=result, message="Payment link created")
