from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class BulkBillingRequest(BaseModel):
    """Monthly batch; empty user_ids means every unbilled resident."""
    user_ids: List[int] = Field(default_factory=list)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020, le=2100)


class BulkCustomBillingRequest(BulkBillingRequest):
    billing_settings_id: int = Field(..., ge=1)


class BatchResult(BaseModel):
    total_residents: int = 0
    total_billings: int = 0
    success_count: int = 0
    failure_count: int = 0
    errors: List[str] = Field(default_factory=list)


class ConfirmPaymentRequest(BaseModel):
    billing_id: int = Field(..., ge=1)


class PaymentWebhookData(BaseModel):
    """Subset of the provider's webhook `data` object we rely on."""
    id: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[int] = None

    model_config = ConfigDict(extra="allow")


class PaymentWebhookPayload(BaseModel):
    """
    Provider callback. The correlation text arrives in data.description;
    a top-level description is accepted as well.
    """
    event: Optional[str] = None
    description: Optional[str] = None
    data: Optional[PaymentWebhookData] = None

    model_config = ConfigDict(extra="allow")

    @property
    def correlation_text(self) -> Optional[str]:
        if self.data is not None and self.data.description:
            return self.data.description
        return self.description


class ReconcileResult(BaseModel):
    confirmed_ids: List[int]
    unmatched_ids: List[int] = Field(default_factory=list)
