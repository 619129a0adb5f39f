"""API V1 Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import billings, payments

api_router = APIRouter()

api_router.include_router(billings.router, prefix="/billings", tags=["Billings"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
