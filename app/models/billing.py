"""Billing Models: definitions, billings and their three link tables"""

from sqlalchemy import Column, String, Text, Integer, BigInteger, Numeric, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import BaseModel, PublishableMixin, ActorMixin
from app.models.enums import BillingKind


class BillingDefinition(BaseModel, PublishableMixin, ActorMixin):
    """
    Template describing a fee amount and cadence (monthly or custom).
    Read-only for billing generation: name, note and amount are copied
    onto each Billing at creation time.
    """
    __tablename__ = "billing_definitions"

    document_id = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    kind = Column(
        ENUM(BillingKind, name="billing_kind", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    note = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<BillingDefinition {self.name} ({self.kind})>"


class Billing(BaseModel, PublishableMixin, ActorMixin):
    """
    One bill for one resident and one period.
    Never deleted; payment state lives on its BillingStatusLink.
    """
    __tablename__ = "billings"

    document_id = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    note = Column(Text, nullable=True)
    month = Column(Integer, nullable=True, index=True)
    year = Column(Integer, nullable=True, index=True)
    amount = Column(BigInteger, nullable=True)

    resident_link = relationship("BillingResidentLink", back_populates="billing", uselist=False)
    status_link = relationship("BillingStatusLink", back_populates="billing", uselist=False)
    category_link = relationship("BillingCategoryLink", back_populates="billing", uselist=False)

    @property
    def period(self) -> tuple:
        return (self.month, self.year)

    def __repr__(self) -> str:
        return f"<Billing {self.id} {self.month}/{self.year} {self.amount}>"


# Link tables carry no audit columns: one row per billing, created with it.

class BillingResidentLink(Base):
    """Billing -> resident (user) association; exactly one per billing."""
    __tablename__ = "billing_resident_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    billing_id = Column(ForeignKey("billings.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    billing = relationship("Billing", back_populates="resident_link")
    user = relationship("User")


class BillingStatusLink(Base):
    """
    Billing -> status association; exactly one per billing.
    The only mutable edge: reconciliation rewrites status_id in place.
    """
    __tablename__ = "billing_status_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    billing_id = Column(ForeignKey("billings.id", ondelete="CASCADE"), nullable=False, index=True)
    status_id = Column(ForeignKey("general_statuses.id", ondelete="RESTRICT"), nullable=False, index=True)

    billing = relationship("Billing", back_populates="status_link")
    status = relationship("GeneralStatus")


class BillingCategoryLink(Base):
    """Billing -> transaction category association; fixed at creation."""
    __tablename__ = "billing_category_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    billing_id = Column(ForeignKey("billings.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(ForeignKey("transaction_categories.id", ondelete="RESTRICT"), nullable=False, index=True)

    billing = relationship("Billing", back_populates="category_link")
    category = relationship("TransactionCategory")
