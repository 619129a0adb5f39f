from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentLinkRequest(BaseModel):
    billing_ids: List[int] = Field(..., min_length=1)

    @field_validator("billing_ids")
    @classmethod
    def positive_ids(cls, v: List[int]) -> List[int]:
        if any(i <= 0 for i in v):
            raise ValueError("billing_ids must be positive integers")
        return v


class PaymentLinkResult(BaseModel):
    """Provider URL plus a locally built echo of what was invoiced."""
    amount: int
    fee: int
    url: str
    description: str
    correlation_ids: List[int]
    invoice_id: Optional[str] = None
    transaction_id: Optional[str] = None
    expired_at: Optional[datetime] = None


class InvoiceItem(BaseModel):
    quantity: int = 1
    rate: int
    description: str


class InvoiceRequest(BaseModel):
    """Body of POST /invoice/create on the payment provider."""
    name: str
    email: str
    mobile: str
    redirect_url: str = Field("", serialization_alias="redirectUrl")
    description: str
    expired_at: str = Field(..., serialization_alias="expiredAt")
    items: List[InvoiceItem]


class InvoiceResult(BaseModel):
    id: Optional[str] = None
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    link: str
    expired_at: Optional[datetime] = Field(None, alias="expiredAt")

    model_config = ConfigDict(populate_by_name=True)
