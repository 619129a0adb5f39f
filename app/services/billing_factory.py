"""Builds unsaved billing rows (plus their three links) for a resident cohort."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple, Optional, Sequence

from app.core.exceptions import ValidationError
from app.models.billing import (
    Billing,
    BillingDefinition,
    BillingResidentLink,
    BillingStatusLink,
    BillingCategoryLink,
)
from app.models.enums import BillingKind
from app.services.reference_service import BillingDefaults
from app.utils.time import get_utc_now


class BillingPeriod(NamedTuple):
    month: int
    year: int

    def validate(self) -> "BillingPeriod":
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Invalid month {self.month}", {"month": self.month})
        if self.year < 1:
            raise ValidationError(f"Invalid year {self.year}", {"year": self.year})
        return self


@dataclass
class BillingBatch:
    """
    Parallel lists: index i of every link list belongs to billings[i].
    Link billing_id values are filled in by the persister after insert.
    """
    total_residents: int = 0
    billings: List[Billing] = field(default_factory=list)
    resident_links: List[BillingResidentLink] = field(default_factory=list)
    status_links: List[BillingStatusLink] = field(default_factory=list)
    category_links: List[BillingCategoryLink] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.billings)


def generate_document_id(kind: BillingKind) -> str:
    return f"{kind.document_prefix}{uuid.uuid4()}"


def build_billing_batch(
    definitions: Sequence[BillingDefinition],
    resident_ids: Sequence[int],
    period: BillingPeriod,
    kind: BillingKind,
    defaults: BillingDefaults,
    actor_id: int,
    now: Optional[datetime] = None,
) -> BillingBatch:
    """
    One Billing + resident/status/category link per (resident, published
    definition). Unpublished definitions are skipped silently; an empty
    cohort yields an empty batch.
    """
    period.validate()
    now = now or get_utc_now()
    batch = BillingBatch(total_residents=len(resident_ids))

    published = [d for d in definitions if d.published_at is not None]

    for resident_id in resident_ids:
        for definition in published:
            billing = Billing(
                document_id=generate_document_id(kind),
                name=definition.name,
                note=definition.note,
                month=period.month,
                year=period.year,
                # Whole currency units; definitions store a decimal amount
                amount=int(definition.amount or 0),
                created_at=now,
                updated_at=now,
                published_at=now,
                created_by_id=actor_id,
                updated_by_id=actor_id,
            )
            batch.billings.append(billing)
            batch.resident_links.append(BillingResidentLink(user_id=resident_id))
            batch.status_links.append(BillingStatusLink(status_id=defaults.unpaid_status_id))
            batch.category_links.append(BillingCategoryLink(category_id=defaults.category_id))

    return batch
