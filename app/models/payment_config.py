"""Payment pricing configuration"""

from sqlalchemy import Column, String, Integer, BigInteger, Boolean

from app.models.base import BaseModel, PublishableMixin, ActorMixin


class PaymentConfig(BaseModel, PublishableMixin, ActorMixin):
    """
    Admin-fee pricing. The most recently published row is the active one.

    payment_fee: base fee per billed period (or flat fee when is_fixed_fee)
    min_month_discount: number of distinct periods from which max_fee applies
    max_fee: capped fee for long payments
    admin_*: payer contact shown on provider invoices when no resident contact
    """
    __tablename__ = "payment_configs"

    payment_fee = Column(BigInteger, nullable=True)
    is_fixed_fee = Column(Boolean, default=False, nullable=True)
    min_month_discount = Column(Integer, nullable=True)
    max_fee = Column(BigInteger, nullable=True)
    admin_name = Column(String(255), nullable=True)
    admin_email = Column(String(255), nullable=True)
    admin_phone = Column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<PaymentConfig {self.id} fee={self.payment_fee}>"
