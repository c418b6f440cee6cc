"""
Status router.

This module contains the liveness endpoint.
"""

from fastapi import APIRouter

router = APIRouter(
    tags=["status"],
)


@router.get("/health_check", response_model=dict)
async def health_check():
    """
    Health check endpoint.

    Always succeeds while the process is serving requests.
    """
    return {"status": "alive"}
