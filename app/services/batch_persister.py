"""All-or-nothing persistence of a BillingBatch."""

import logging
from typing import Iterator, List, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.schemas.billing import BatchResult
from app.services.billing_factory import BillingBatch

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


async def _insert_in_chunks(db: AsyncSession, rows: Sequence[object], chunk_size: int) -> None:
    for chunk in chunked(rows, chunk_size):
        db.add_all(chunk)
        await db.flush()


async def persist_billing_batch(
    db: AsyncSession,
    batch: BillingBatch,
    chunk_size: int = settings.BILLING_CHUNK_SIZE,
) -> BatchResult:
    """
    Insert billings, backfill link foreign keys from the generated ids, then
    insert the three link sets, all in one transaction.

    Any failure rolls the whole batch back: the result then reports every
    billing as failed together with the first error message.
    """
    result = BatchResult(
        total_residents=batch.total_residents,
        total_billings=len(batch.billings),
    )
    if not batch.billings:
        return result

    try:
        await _insert_in_chunks(db, batch.billings, chunk_size)

        for i, billing in enumerate(batch.billings):
            batch.resident_links[i].billing_id = billing.id
            batch.status_links[i].billing_id = billing.id
            batch.category_links[i].billing_id = billing.id

        await _insert_in_chunks(db, batch.resident_links, chunk_size)
        await _insert_in_chunks(db, batch.status_links, chunk_size)
        await _insert_in_chunks(db, batch.category_links, chunk_size)

        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.exception(
            "Billing batch rolled back",
            extra={"total_billings": result.total_billings},
        )
        result.failure_count = result.total_billings
        result.errors = [f"failed to persist billing batch: {e}"]
        return result

    result.success_count = result.total_billings
    logger.info(
        "Billing batch committed",
        extra={
            "total_residents": result.total_residents,
            "total_billings": result.total_billings,
        },
    )
    return result
