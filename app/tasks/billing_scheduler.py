"""
Scheduled monthly billing generation.

A single background task on the event loop sleeps until the next cron
instant, then generates monthly billings for every resident not yet billed
for the current month. Each run leaves START / RUNNING / SUCCESS|FAILED
rows in scheduler_logs under one document id. A failing run is logged and
swallowed; the next instant is scheduled regardless.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.database import AsyncSessionLocal
from app.models.enums import SchedulerRunState
from app.models.scheduler_log import SchedulerLog
from app.schemas.billing import BatchResult
from app.services.audit_service import AuditService
from app.services.billing_factory import BillingPeriod
from app.services.billing_service import BillingService
from app.utils.cron import CronSchedule
from app.utils.time import get_utc_now

logger = logging.getLogger(__name__)

SCHEDULER_CODE = "MONTHLY_BILLING_CREATION"


class BillingScheduler:
    def __init__(
        self,
        session_factory: async_sessionmaker = AsyncSessionLocal,
        cron_expression: str = settings.BILLING_CRON_EXPRESSION,
        actor_id: int = settings.SYSTEM_ACTOR_ID,
        timezone: str = settings.SCHEDULER_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._session_factory = session_factory
        self._schedule = CronSchedule.parse(cron_expression)
        self._actor_id = actor_id
        self._tz = ZoneInfo(timezone)
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info("Billing scheduler started", extra={"cron_expression": self._schedule.expression})
        self._task = asyncio.create_task(self._loop(), name="billing-scheduler")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Billing scheduler stopped")

    async def _loop(self) -> None:
        last_fire_at: Optional[datetime] = None
        while True:
            now = self._clock()
            # The wall clock may still read before the last fire after waking
            fire_at = self._schedule.next_after(max(now, last_fire_at) if last_fire_at else now)
            delay = (fire_at - now).total_seconds()
            logger.info("Next billing run scheduled", extra={"fire_at": fire_at.isoformat()})
            await asyncio.sleep(max(delay, 0))
            last_fire_at = fire_at
            await self.run_once(fire_at)

    async def _audit(self, db: AsyncSession, document_id: str, status: SchedulerRunState, message: str) -> None:
        now = get_utc_now()
        await AuditService.append(
            db,
            SchedulerLog(
                document_id=document_id,
                scheduler_code=SCHEDULER_CODE,
                message=message,
                status=status.value,
                created_at=now,
                updated_at=now,
                published_at=now,
                created_by_id=self._actor_id,
                updated_by_id=self._actor_id,
                locale="en",
            ),
        )

    async def run_once(self, now: Optional[datetime] = None) -> Optional[BatchResult]:
        """Generate monthly billings for the month of `now`. Never raises."""
        now = now or self._clock()
        document_id = str(uuid.uuid4())
        period = BillingPeriod(now.month, now.year)
        log_extra = {"correlation_id": document_id, "month": period.month, "year": period.year}

        try:
            async with self._session_factory() as db:
                await self._audit(db, document_id, SchedulerRunState.START,
                                  "Starting scheduled monthly billing creation")
                await self._audit(db, document_id, SchedulerRunState.RUNNING,
                                  f"Creating monthly billings for month {period.month} year {period.year}")
                logger.info("Creating monthly billings for all residents", extra=log_extra)

                try:
                    result = await BillingService.generate_monthly_for_all(db, period, self._actor_id)
                except Exception as e:
                    await db.rollback()
                    logger.exception("Scheduled monthly billing failed", extra=log_extra)
                    await self._audit(db, document_id, SchedulerRunState.FAILED,
                                      f"Failed to create monthly billings: {e}")
                    return None

                summary = result.model_dump_json()
                if result.failure_count:
                    logger.error("Scheduled monthly billing rolled back", extra={**log_extra, "summary": summary})
                    await self._audit(db, document_id, SchedulerRunState.FAILED,
                                      f"Failed to create monthly billings: {summary}")
                else:
                    logger.info("Scheduled monthly billing completed", extra={**log_extra, "summary": summary})
                    await self._audit(db, document_id, SchedulerRunState.SUCCESS,
                                      f"Monthly billings created successfully: {summary}")
                return result
        except Exception:
            logger.exception("Billing scheduler run aborted", extra=log_extra)
            return None
