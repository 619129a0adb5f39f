"""Unit tests for building billing batches."""

from datetime import datetime
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.models.billing import BillingDefinition
from app.models.enums import BillingKind
from app.services.billing_factory import BillingPeriod, build_billing_batch, generate_document_id
from app.services.reference_service import BillingDefaults

DEFAULTS = BillingDefaults(unpaid_status_id=3, paid_status_id=6, category_id=1)
NOW = datetime(2025, 3, 1, 0, 0, 0)


def _definition(def_id, name, amount, published=True):
    return BillingDefinition(
        id=def_id,
        name=name,
        kind=BillingKind.MONTHLY,
        amount=Decimal(amount),
        note=f"{name} note",
        published_at=NOW if published else None,
    )


def test_one_billing_per_resident_and_definition():
    definitions = [_definition(1, "Keamanan", "150000"), _definition(2, "Kebersihan", "50000")]
    batch = build_billing_batch(
        definitions, [10, 11, 12], BillingPeriod(3, 2025), BillingKind.MONTHLY, DEFAULTS, actor_id=7, now=NOW
    )

    assert batch.total_residents == 3
    assert len(batch) == 6
    assert len(batch.resident_links) == len(batch.status_links) == len(batch.category_links) == 6
    assert [link.user_id for link in batch.resident_links] == [10, 10, 11, 11, 12, 12]
    assert [b.name for b in batch.billings[:2]] == ["Keamanan", "Kebersihan"]


def test_billing_fields_copied_from_definition():
    batch = build_billing_batch(
        [_definition(1, "Keamanan", "150000.00")], [10], BillingPeriod(3, 2025),
        BillingKind.MONTHLY, DEFAULTS, actor_id=7, now=NOW,
    )
    billing = batch.billings[0]

    assert billing.amount == 150000
    assert billing.note == "Keamanan note"
    assert (billing.month, billing.year) == (3, 2025)
    assert billing.published_at == NOW
    assert billing.created_by_id == billing.updated_by_id == 7
    assert billing.document_id.startswith("monthly-")
    assert batch.status_links[0].status_id == 3
    assert batch.category_links[0].category_id == 1
    assert batch.status_links[0].billing_id is None


def test_unpublished_definitions_are_skipped():
    definitions = [_definition(1, "Keamanan", "150000"), _definition(2, "Draft", "1", published=False)]
    batch = build_billing_batch(
        definitions, [10, 11], BillingPeriod(3, 2025), BillingKind.MONTHLY, DEFAULTS, actor_id=1, now=NOW
    )
    assert len(batch) == 2
    assert {b.name for b in batch.billings} == {"Keamanan"}


def test_empty_cohort_gives_empty_batch():
    batch = build_billing_batch(
        [_definition(1, "Keamanan", "150000")], [], BillingPeriod(3, 2025),
        BillingKind.MONTHLY, DEFAULTS, actor_id=1,
    )
    assert len(batch) == 0
    assert batch.total_residents == 0


def test_document_ids_are_unique_and_prefixed():
    ids = {generate_document_id(BillingKind.CUSTOM) for _ in range(50)}
    assert len(ids) == 50
    assert all(doc_id.startswith("custom-") for doc_id in ids)


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month_rejected(month):
    with pytest.raises(ValidationError):
        build_billing_batch(
            [_definition(1, "Keamanan", "1")], [10], BillingPeriod(month, 2025),
            BillingKind.MONTHLY, DEFAULTS, actor_id=1,
        )
