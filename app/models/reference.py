"""Reference rows: general statuses and transaction categories"""

from sqlalchemy import Column, String

from app.models.base import BaseModel, PublishableMixin, ActorMixin


class GeneralStatus(BaseModel, PublishableMixin, ActorMixin):
    """Enum-like status row, e.g. "Belum Dibayar" (unpaid) or "Lunas" (paid)."""
    __tablename__ = "general_statuses"

    document_id = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<GeneralStatus {self.id} {self.name}>"


class TransactionCategory(BaseModel, PublishableMixin, ActorMixin):
    """Transaction category a billing is filed under."""
    __tablename__ = "transaction_categories"

    document_id = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<TransactionCategory {self.id} {self.name}>"
