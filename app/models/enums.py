"""Centralized Enum Definitions"""

import enum


class BillingKind(str, enum.Enum):
    """Billing definition cadence"""
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @property
    def document_prefix(self) -> str:
        """Prefix for generated billing document ids (e.g. monthly-<uuid>)"""
        return f"{self.value}-"


class SchedulerRunState(str, enum.Enum):
    """Audit states written by the billing scheduler on each run"""
    START = "START"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ReconcileState(str, enum.Enum):
    """Lifecycle of a single payment webhook"""
    RECEIVED = "received"
    DECODED = "decoded"
    RECONCILING = "reconciling"
    COMMITTED = "committed"
    REJECTED_PARSE = "rejected_parse_error"
    REJECTED_DB = "rejected_db_error"
