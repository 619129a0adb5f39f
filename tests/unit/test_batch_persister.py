"""Unit tests for all-or-nothing batch persistence."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing import Billing, BillingDefinition
from app.models.enums import BillingKind
from app.services.batch_persister import chunked, persist_billing_batch
from app.services.billing_factory import BillingBatch, BillingPeriod, build_billing_batch
from app.services.reference_service import BillingDefaults

DEFAULTS = BillingDefaults(unpaid_status_id=3, paid_status_id=6, category_id=1)


def _batch(resident_ids):
    definition = BillingDefinition(
        id=1, name="Keamanan", kind=BillingKind.MONTHLY, amount=Decimal("100000"),
        published_at=datetime(2025, 1, 1),
    )
    return build_billing_batch(
        [definition], resident_ids, BillingPeriod(4, 2025), BillingKind.MONTHLY, DEFAULTS, actor_id=1
    )


def _session():
    """Mock session whose flush assigns ids to pending billings."""
    db = AsyncMock(spec=AsyncSession)
    added = []
    ids = iter(range(101, 10_000))

    db.add_all.side_effect = lambda rows: added.extend(rows)

    async def flush():
        for row in added:
            if isinstance(row, Billing) and row.id is None:
                row.id = next(ids)

    db.flush.side_effect = flush
    return db, added


def test_chunked_splits_evenly_and_keeps_remainder():
    assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    assert list(chunked([], 2)) == []
    with pytest.raises(ValueError):
        list(chunked([1], 0))


@pytest.mark.asyncio
async def test_persist_inserts_billings_then_links_in_chunks():
    db, added = _session()
    batch = _batch([10, 11, 12])

    result = await persist_billing_batch(db, batch, chunk_size=2)

    assert result.success_count == 3
    assert result.failure_count == 0
    assert result.errors == []
    # 2 chunks each for billings and the three link sets
    assert db.add_all.call_count == 8
    assert added[:3] == batch.billings
    for i, billing in enumerate(batch.billings):
        assert billing.id is not None
        assert batch.resident_links[i].billing_id == billing.id
        assert batch.status_links[i].billing_id == billing.id
        assert batch.category_links[i].billing_id == billing.id
    db.commit.assert_awaited_once()
    db.rollback.assert_not_called()


@pytest.mark.asyncio
async def test_persist_rolls_back_whole_batch_on_failure():
    db, _ = _session()
    calls = {"n": 0}

    async def failing_flush():
        calls["n"] += 1
        if calls["n"] == 3:
            raise RuntimeError("foreign key violation")

    db.flush.side_effect = failing_flush
    batch = _batch([10, 11])

    result = await persist_billing_batch(db, batch, chunk_size=1)

    assert result.total_billings == 2
    assert result.success_count == 0
    assert result.failure_count == 2
    assert len(result.errors) == 1
    assert "foreign key violation" in result.errors[0]
    db.rollback.assert_awaited_once()
    db.commit.assert_not_called()


@pytest.mark.asyncio
async def test_empty_batch_writes_nothing():
    db, _ = _session()

    result = await persist_billing_batch(db, BillingBatch(total_residents=0))

    assert result.total_billings == 0
    assert result.success_count == 0
    db.add_all.assert_not_called()
    db.commit.assert_not_called()
