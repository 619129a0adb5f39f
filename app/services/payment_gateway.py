"""
Payment provider client (Mayar invoice API).

Wraps POST /invoice/create. One attempt per call, bounded by
PAYMENT_REQUEST_TIMEOUT; any transport failure, non-2xx answer or body
without a payment link surfaces as UpstreamError for the caller to retry.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.exceptions import UpstreamError
from app.schemas.payment import InvoiceRequest, InvoiceResult

logger = logging.getLogger(__name__)

INVOICE_CREATE_PATH = "/invoice/create"


class PaymentGatewayClient:
    """Async HTTP client for the provider's invoicing endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = (base_url or settings.MAYAR_BASE_URL).rstrip("/")
        self._auth_key = auth_key if auth_key is not None else settings.MAYAR_AUTH_KEY
        self._timeout = timeout if timeout is not None else settings.PAYMENT_REQUEST_TIMEOUT
        self._transport = transport

    async def create_invoice(self, invoice: InvoiceRequest) -> InvoiceResult:
        if not self._auth_key:
            raise UpstreamError("Payment provider credentials not configured")

        url = f"{self._base_url}{INVOICE_CREATE_PATH}"
        headers = {
            "Authorization": f"Bearer {self._auth_key}",
            "Content-Type": "application/json",
        }
        body = invoice.model_dump(by_alias=True)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.error("Payment provider timed out after %.0fs: %s", self._timeout, e)
            raise UpstreamError("Payment provider timed out") from e
        except httpx.HTTPError as e:
            logger.error("Payment provider unreachable: %s", e)
            raise UpstreamError(f"Payment provider unreachable: {e}") from e

        if not resp.is_success:
            logger.error(
                "Payment provider rejected invoice",
                extra={"status_code": resp.status_code, "response": resp.text[:500]},
            )
            raise UpstreamError(
                f"Payment provider returned HTTP {resp.status_code}",
                upstream_status=resp.status_code,
                context={"response": resp.text[:500]},
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise UpstreamError("Payment provider returned a non-JSON body",
                                upstream_status=resp.status_code) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise UpstreamError("Payment provider response has no data object",
                                upstream_status=resp.status_code)
        try:
            result = InvoiceResult.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError("Payment provider response is missing the payment link",
                                upstream_status=resp.status_code) from e
        if not result.link:
            raise UpstreamError("Payment provider response is missing the payment link",
                                upstream_status=resp.status_code)

        logger.info(
            "Invoice created",
            extra={"invoice_id": result.id, "transaction_id": result.transaction_id},
        )
        return result
