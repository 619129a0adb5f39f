"""API Dependencies"""

from typing import Optional
from fastapi import Header

from app.config import settings
from app.database import get_db  # noqa: F401  re-exported for routers
from app.services.payment_gateway import PaymentGatewayClient


async def get_actor_id(
    x_actor_id: Optional[int] = Header(default=None, alias="X-Actor-ID"),
) -> int:
    """
    Id of the user on whose behalf the request runs.

    Authentication happens upstream; the gateway forwards the resolved user
    id in X-Actor-ID. Requests without it run as the system actor.
    """
    if x_actor_id is None or x_actor_id <= 0:
        return settings.SYSTEM_ACTOR_ID
    return x_actor_id


def get_payment_gateway() -> PaymentGatewayClient:
    return PaymentGatewayClient()
