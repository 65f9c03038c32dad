"""
Top‑level router for version 1 of the API.
"""

from fastapi import APIRouter

from .endpoints import auth, transactions


router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
