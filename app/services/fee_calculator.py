"""Admin fee pricing for a single payment transaction."""

from typing import Iterable, Optional, Set, Tuple

DEFAULT_DISCOUNT_THRESHOLD = 6

Period = Tuple[int, int]


def distinct_periods(periods: Iterable[Period]) -> Set[Period]:
    """Collapse (month, year) pairs to the distinct set."""
    return {(int(month), int(year)) for month, year in periods}


def calculate_admin_fee(periods: Iterable[Period], config: Optional[object]) -> int:
    """
    Compute the admin/service fee for the billing periods paid together.

    - fixed fee: the base fee, whatever the number of periods
    - fewer distinct periods than the discount threshold: n * base fee
    - otherwise: the capped fee when one is configured, else n * base fee

    `config` is the active PaymentConfig (or anything exposing the same
    attributes). No config means no fee. Never negative.
    """
    if config is None:
        return 0

    n = len(distinct_periods(periods))
    base_fee = max(int(getattr(config, "payment_fee", None) or 0), 0)

    if getattr(config, "is_fixed_fee", False):
        return base_fee

    threshold = getattr(config, "min_month_discount", None) or DEFAULT_DISCOUNT_THRESHOLD
    if threshold <= 0:
        threshold = DEFAULT_DISCOUNT_THRESHOLD

    if n < threshold:
        return n * base_fee

    # A zero or missing cap counts as "not configured"
    capped_fee = getattr(config, "max_fee", None)
    if capped_fee:
        return max(int(capped_fee), 0)
    return n * base_fee
