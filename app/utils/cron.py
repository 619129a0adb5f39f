"""
Cron schedules for the billing scheduler, backed by croniter.

Six fields, seconds first: "sec min hour day-of-month month day-of-week".
Day-of-month and day-of-week combine the usual way: when either field
starts with * or ? both must match, otherwise either one is enough.
"""

from dataclasses import dataclass
from datetime import datetime

from croniter import croniter

_FIELD_COUNT = 6
_DAY_OF_MONTH = 3
_DAY_OF_WEEK = 5


def _unrestricted(field: str) -> bool:
    return field.startswith(("*", "?"))


@dataclass(frozen=True)
class CronSchedule:
    expression: str
    day_or: bool

    @classmethod
    def parse(cls, expression: str) -> "CronSchedule":
        """Validate `expression`; raises ValueError when it is not a six-field cron."""
        fields = expression.split()
        if len(fields) != _FIELD_COUNT:
            raise ValueError(f"Cron expression must have 6 fields, got {len(fields)}: {expression!r}")

        day_or = not (_unrestricted(fields[_DAY_OF_MONTH]) or _unrestricted(fields[_DAY_OF_WEEK]))
        schedule = cls(expression=" ".join(fields), day_or=day_or)
        # croniter errors subclass ValueError
        schedule._iter(datetime(2000, 1, 1))
        return schedule

    def _iter(self, start: datetime) -> croniter:
        return croniter(
            self.expression,
            start,
            ret_type=datetime,
            day_or=self.day_or,
            second_at_beginning=True,
        )

    def next_after(self, after: datetime) -> datetime:
        """First matching instant strictly after `after` (same tzinfo)."""
        return self._iter(after).get_next(datetime)
