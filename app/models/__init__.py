"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, PublishableMixin, ActorMixin
from app.models.enums import BillingKind, SchedulerRunState, ReconcileState
from app.models.user import User, Role, user_roles
from app.models.reference import GeneralStatus, TransactionCategory
from app.models.billing import (
    BillingDefinition,
    Billing,
    BillingResidentLink,
    BillingStatusLink,
    BillingCategoryLink,
)
from app.models.payment_config import PaymentConfig
from app.models.scheduler_log import SchedulerLog


__all__ = [
    # Base classes
    "BaseModel",
    "PublishableMixin",
    "ActorMixin",

    # Enums
    "BillingKind",
    "SchedulerRunState",
    "ReconcileState",

    # Residents
    "User",
    "Role",
    "user_roles",

    # Reference data
    "GeneralStatus",
    "TransactionCategory",

    # Billing
    "BillingDefinition",
    "Billing",
    "BillingResidentLink",
    "BillingStatusLink",
    "BillingCategoryLink",

    # Payment
    "PaymentConfig",

    # Audit
    "SchedulerLog",
]
