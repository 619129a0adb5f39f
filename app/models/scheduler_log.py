"""Append-only audit trail for scheduler runs"""

from sqlalchemy import Column, String, Text

from app.models.base import BaseModel, PublishableMixin, ActorMixin


class SchedulerLog(BaseModel, PublishableMixin, ActorMixin):
    """One row per scheduler run-state transition (START, RUNNING, ...)."""
    __tablename__ = "scheduler_logs"

    document_id = Column(String(255), nullable=True, index=True)
    scheduler_code = Column(String(100), nullable=True, index=True)
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<SchedulerLog {self.scheduler_code} {self.status}>"
