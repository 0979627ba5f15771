"""
tests.conftest

Shared fixtures: strategy config factory, fake inbound request, fake SSO server.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from cas2_strategy.strategy.config import StrategyConfig

SSO_BASE_URL = "https://sso.example.com"
SSO_LOGIN_URL = "https://sso.example.com/cas/login"
VALIDATE_ENDPOINT = "/cas/serviceValidate"
APP_SERVICE_URL = "https://app.example.com/cas"

SUCCESS_XML = """<cas:serviceResponse xmlns:cas="http://www.yale.edu/tp/cas">
  <cas:authenticationSuccess>
    <cas:user>alice</cas:user>
    <cas:attributes>
      <cas:uid>alice</cas:uid>
      <cas:mail>alice@example.com</cas:mail>
      <cas:memberOf>staff</cas:memberOf>
      <cas:memberOf>admins</cas:memberOf>
    </cas:attributes>
  </cas:authenticationSuccess>
</cas:serviceResponse>"""

INVALID_TICKET_XML = (
    "<cas:serviceResponse><cas:authenticationFailure code=\"INVALID_TICKET\">"
    "Ticket expired</cas:authenticationFailure></cas:serviceResponse>"
)


@dataclass
class FakeRequest:
    query_params: dict[str, str] = field(default_factory=dict)


def accept_verify(attributes, done) -> None:
    done(None, {"uid": attributes.get("uid")}, {"message": "ok"})


@pytest.fixture
def make_config() -> Callable[..., StrategyConfig]:
    def _make(**overrides: Any) -> StrategyConfig:
        values: dict[str, Any] = {
            "sso_base_url": SSO_BASE_URL,
            "sso_login_url": SSO_LOGIN_URL,
            "validate_endpoint": VALIDATE_ENDPOINT,
            "app_service_url": APP_SERVICE_URL,
            "verify": accept_verify,
        }
        values.update(overrides)
        return StrategyConfig(**values)

    return _make


class FakeSso:
    """
    MockTransport handler that records every request and replies with a fixed body.
    """

    def __init__(self, body: str = SUCCESS_XML, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            content=self.body.encode("utf-8"),
            headers={"Content-Type": "application/xml"},
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def fake_sso() -> FakeSso:
    return FakeSso()
