"""
Health check router.

Liveness only: no dependency checks.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/health-check", response_class=PlainTextResponse)
async def health_check():
    """Always returns 200 OK while the process is serving requests."""
    return "OK"
