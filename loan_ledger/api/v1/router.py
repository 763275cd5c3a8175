"""Main v1 router aggregator"""
from fastapi import APIRouter

from loan_ledger.api.v1 import allocations

# Create v1 router
api_router = APIRouter()

# Include all v1 routers
api_router.include_router(allocations.router)
