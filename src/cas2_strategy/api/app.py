"""
cas2_strategy.api.app

FastAPI app factory for the CAS 2.0 host.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the shared HTTP client and the strategy instance.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cas2_strategy import __version__
from cas2_strategy.api.routers.cas import router as cas_router
from cas2_strategy.api.routers.health import router as health_router
from cas2_strategy.auth.models import default_verify
from cas2_strategy.observability.logging import configure_logging, get_logger
from cas2_strategy.observability.middleware import RequestContextMiddleware
from cas2_strategy.settings import Settings
from cas2_strategy.strategy.config import StrategyConfig, VerifyFunction
from cas2_strategy.strategy.context import Cas2Strategy

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    verify: VerifyFunction | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    """
    `verify` defaults to `default_verify`; `http` lets callers inject a transport
    (the app closes only clients it created).
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    # Built eagerly so configuration errors fail at startup, not on the first login.
    config = StrategyConfig.from_settings(settings, verify=verify or default_verify)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, sso_base_url=settings.sso_base_url)
        client = http or httpx.AsyncClient(follow_redirects=False)
        app.state.http = client
        app.state.strategy = Cas2Strategy(config=config, http=client)
        try:
            yield
        finally:
            if http is None:
                await client.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="CAS 2.0 Authentication Strategy",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(cas_router)

    return app


# --- Module Notes -----------------------------------------------------------
# One `httpx.AsyncClient` per process keeps a connection pool to the SSO server.
