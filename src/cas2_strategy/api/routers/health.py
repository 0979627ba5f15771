"""
cas2_strategy.api.routers.health

Health endpoint.

Responsibilities:
- Provide liveness probe (`/healthz`).
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness only: the SSO server is contacted per login, not probed here.
    return {"status": "ok"}
