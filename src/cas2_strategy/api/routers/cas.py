"""
cas2_strategy.api.routers.cas

CAS login route.

Responsibilities:
- Run the strategy for `GET /v1/auth/cas/login` (first visit and CAS callback).
- Map Redirect/Success/Fail/Error onto 302/200/4xx/5xx responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import RedirectResponse
from starlette.status import (
    HTTP_302_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from cas2_strategy.api.deps import strategy_dep
from cas2_strategy.strategy.context import Cas2Strategy
from cas2_strategy.strategy.errors import NetworkError
from cas2_strategy.strategy.outcomes import Error, Fail, Redirect, Success

router = APIRouter(prefix="/v1/auth/cas", tags=["cas"])


@router.get("/login", response_model=None)
async def cas_login(
    request: Request,
    strategy: Cas2Strategy = Depends(strategy_dep),
) -> RedirectResponse | dict[str, Any]:
    result = await strategy.authenticate(request)

    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=HTTP_302_FOUND)
    if isinstance(result, Success):
        return jsonable_encoder({"user": result.user, "info": result.info})
    if isinstance(result, Fail):
        raise HTTPException(status_code=result.status_code, detail=jsonable_encoder(result.info))
    if isinstance(result, Error):
        # The SSO server being unreachable is an upstream failure, not ours.
        status = (
            HTTP_502_BAD_GATEWAY
            if isinstance(result.error, NetworkError)
            else HTTP_500_INTERNAL_SERVER_ERROR
        )
        raise HTTPException(status_code=status, detail=str(result.error))
    raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Unknown result")


# --- Module Notes -----------------------------------------------------------
# `app_service_url` should point at this route so the CAS callback lands here with
# `?ticket=...`.
