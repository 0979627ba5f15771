"""
tests.test_smoke

Smoke + host-adapter tests: the FastAPI app boots and maps strategy results to HTTP.

Responsibilities:
- Ensure the app starts and serves `/healthz`.
- Exercise the login route against a fake SSO server for each result variant.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import pytest
from conftest import APP_SERVICE_URL, INVALID_TICKET_XML, FakeSso

from cas2_strategy.api.app import create_app
from cas2_strategy.settings import Settings

SETTINGS = Settings(
    env="test",
    sso_base_url="https://sso.example.com",
    sso_login_url="https://sso.example.com/cas/login",
    validate_endpoint="/cas/serviceValidate",
    app_service_url=APP_SERVICE_URL,
)


@asynccontextmanager
async def serve(sso_http: httpx.AsyncClient | None = None, **kwargs) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=SETTINGS, http=sso_http, **kwargs)

    # ASGITransport does not drive lifespan events; run the app lifespan around the client.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    async with serve() as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_login_without_ticket_redirects() -> None:
    sso = FakeSso()
    async with sso.client() as sso_http, serve(sso_http) as client:
        r = await client.get("/v1/auth/cas/login")

    assert r.status_code == 302
    assert r.headers["location"] == (
        "https://sso.example.com/cas/login?service=https%3A%2F%2Fapp.example.com%2Fcas"
    )
    assert sso.requests == []


@pytest.mark.asyncio
async def test_login_with_valid_ticket_returns_user() -> None:
    sso = FakeSso()
    async with sso.client() as sso_http, serve(sso_http) as client:
        r = await client.get("/v1/auth/cas/login", params={"ticket": "ST-123"})

    assert r.status_code == 200
    body = r.json()
    assert body["user"]["subject"] == "alice"
    assert body["user"]["attributes"]["memberof"] == ["staff", "admins"]
    assert len(sso.requests) == 1


@pytest.mark.asyncio
async def test_login_with_expired_ticket_is_401() -> None:
    sso = FakeSso(body=INVALID_TICKET_XML)
    async with sso.client() as sso_http, serve(sso_http) as client:
        r = await client.get("/v1/auth/cas/login", params={"ticket": "ST-123"})

    assert r.status_code == 401
    assert r.json()["detail"] == {"message": "Authentication timed out"}


@pytest.mark.asyncio
async def test_custom_verify_rejection_is_401() -> None:
    def reject(attributes, done):
        done(None, False, {"message": "not enrolled"})

    async with FakeSso().client() as sso_http, serve(sso_http, verify=reject) as client:
        r = await client.get("/v1/auth/cas/login", params={"ticket": "ST-1"})

    assert r.status_code == 401
    assert r.json()["detail"] == {"message": "not enrolled"}


@pytest.mark.asyncio
async def test_unreachable_sso_is_502() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as sso_http:
        async with serve(sso_http) as client:
            r = await client.get("/v1/auth/cas/login", params={"ticket": "ST-1"})

    assert r.status_code == 502


@pytest.mark.asyncio
async def test_malformed_response_is_500() -> None:
    sso = FakeSso(body="<oops/>")
    async with sso.client() as sso_http, serve(sso_http) as client:
        r = await client.get("/v1/auth/cas/login", params={"ticket": "ST-1"})

    assert r.status_code == 500


@pytest.mark.asyncio
async def test_lifespan_closes_only_the_client_it_created() -> None:
    app = create_app(settings=SETTINGS)
    async with app.router.lifespan_context(app):
        owned = app.state.http
        assert not owned.is_closed
        assert app.state.strategy.name == "cas2"
    assert owned.is_closed

    async with FakeSso().client() as injected:
        app = create_app(settings=SETTINGS, http=injected)
        async with app.router.lifespan_context(app):
            assert app.state.http is injected
        assert not injected.is_closed
