"""
cas2_strategy.strategy.config

Runtime configuration for the CAS 2.0 strategy.

Responsibilities:
- Hold the SSO endpoints, the application service URL and the verify function.
- Build the login and validation URLs from one `service` encoder so both carry the
  same bytes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

if TYPE_CHECKING:
    from cas2_strategy.settings import Settings

# verify(attributes, done) or verify(request, attributes, done); may be async.
VerifyFunction = Callable[..., Awaitable[None] | None]

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class StrategyConfig:
    sso_base_url: str
    sso_login_url: str
    validate_endpoint: str
    app_service_url: str
    verify: VerifyFunction
    pass_request_to_verify: bool = False
    validate_timeout: float = DEFAULT_TIMEOUT_SECONDS
    verify_timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not callable(self.verify):
            raise TypeError("Cas2Strategy requires a verify callback")
        if self.validate_timeout <= 0 or self.verify_timeout <= 0:
            raise ValueError("timeouts must be positive")

    @classmethod
    def from_settings(cls, settings: Settings, *, verify: VerifyFunction) -> StrategyConfig:
        return cls(
            sso_base_url=settings.sso_base_url,
            sso_login_url=settings.sso_login_url,
            validate_endpoint=settings.validate_endpoint,
            app_service_url=settings.app_service_url,
            verify=verify,
            pass_request_to_verify=settings.pass_request_to_verify,
            validate_timeout=settings.validate_timeout_seconds,
            verify_timeout=settings.verify_timeout_seconds,
        )

    def login_url(self) -> str:
        """
        `sso_login_url` with `service=<app_service_url>` added; existing query params are kept.
        """

        parts = urlsplit(self.sso_login_url)
        query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "service"]
        query.append(("service", self.app_service_url))
        return urlunsplit(parts._replace(query=encode_query(query)))

    def validate_url(self, ticket: str, service_url: str | None = None) -> str:
        service = self.app_service_url if service_url is None else service_url
        query = encode_query([("service", service), ("ticket", ticket)])
        return f"{self.sso_base_url}{self.validate_endpoint}?{query}"


def encode_query(params: list[tuple[str, Any]]) -> str:
    # Single encoder for both URLs: `/` and `:` are percent-encoded, spaces become `+`.
    return urlencode(params)


# --- Module Notes -----------------------------------------------------------
# CAS binds a ticket to the exact service string it was issued for, so the login
# redirect and the validation call must never encode `app_service_url` differently.
