"""Audit Service - append-only scheduler log"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.scheduler_log import SchedulerLog

logger = logging.getLogger(__name__)


class AuditService:
    @staticmethod
    async def append(db: AsyncSession, entry: SchedulerLog) -> bool:
        """
        Insert and commit one audit row in its own transaction.
        Returns False when the write fails; audit failures never propagate.
        """
        try:
            db.add(entry)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception(
                "Failed to write scheduler log entry",
                extra={"status": entry.status, "correlation_id": entry.document_id},
            )
            return False

        logger.info(
            "Scheduler log entry written",
            extra={"status": entry.status, "correlation_id": entry.document_id},
        )
        return True
