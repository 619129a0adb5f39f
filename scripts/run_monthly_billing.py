#!/usr/bin/env python3
"""
Run one scheduled monthly billing pass by hand.

Usage:
  python scripts/run_monthly_billing.py                 # current month
  python scripts/run_monthly_billing.py --month 3 --year 2026

Writes the same START / RUNNING / SUCCESS|FAILED scheduler_logs rows as the
in-process scheduler. Requires DATABASE_URL in .env (or export).
"""
import argparse
import asyncio
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_root, ".env"))

# Add project root to path
sys.path.insert(0, _root)

from app.core.logging import setup_logging  # noqa: E402
from app.database import close_db  # noqa: E402
from app.tasks.billing_scheduler import BillingScheduler  # noqa: E402


async def _run(month, year) -> int:
    scheduler = BillingScheduler()
    now = datetime(year, month, 1) if month and year else None
    try:
        result = await scheduler.run_once(now)
    finally:
        await close_db()
    if result is None or result.failure_count:
        print("FAILED: see scheduler_logs and application logs.")
        return 1
    print(
        f"SUCCESS: {result.total_billings} billings for {result.total_residents} residents "
        f"({result.success_count} saved)."
    )
    return 0


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--month", type=int, choices=range(1, 13))
    parser.add_argument("--year", type=int)
    args = parser.parse_args()
    if bool(args.month) != bool(args.year):
        parser.error("--month and --year go together")

    setup_logging()
    sys.exit(asyncio.run(_run(args.month, args.year)))


if __name__ == "__main__":
    main()
