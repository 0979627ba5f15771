"""
cas2_strategy.strategy.context

Per-request entry point of the CAS 2.0 strategy.

Responsibilities:
- Redirect callers without a ticket to the SSO login page.
- Validate a presented ticket, interpret the response and run the verify function.
- Guarantee one terminal `AuthenticationResult` per call; nothing is raised to the host.

Request lifecycle:
    INIT -> REDIRECTED
    INIT -> VALIDATING -> VALIDATED_SUCCESS | VALIDATED_FAILURE | VALIDATION_ERROR -> RESOLVED
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from cas2_strategy.observability.logging import get_logger
from cas2_strategy.strategy.config import StrategyConfig
from cas2_strategy.strategy.errors import NetworkError
from cas2_strategy.strategy.outcomes import (
    AuthenticationResult,
    Error,
    Redirect,
    SupportsQueryParams,
    ValidationFailure,
    ValidationOutcome,
    ValidationSuccess,
)
from cas2_strategy.strategy.parser import parse_service_response
from cas2_strategy.strategy.validator import TicketValidator
from cas2_strategy.strategy.verify import VerifyAdapter

log = get_logger(__name__)

TICKET_PARAM = "ticket"


class AuthState(str, enum.Enum):
    init = "INIT"
    redirected = "REDIRECTED"
    validating = "VALIDATING"
    validated_success = "VALIDATED_SUCCESS"
    validated_failure = "VALIDATED_FAILURE"
    validation_error = "VALIDATION_ERROR"
    resolved = "RESOLVED"


@dataclass(frozen=True, slots=True)
class ValidationContext:
    # Everything the validation continuation needs, captured once per request.
    config: StrategyConfig
    request: SupportsQueryParams
    ticket: str


def _state_after(outcome: ValidationOutcome) -> AuthState:
    if isinstance(outcome, ValidationSuccess):
        return AuthState.validated_success
    if isinstance(outcome, ValidationFailure):
        return AuthState.validated_failure
    return AuthState.validation_error


class Cas2Strategy:
    """
    CAS 2.0 strategy: `authenticate(request)` returns Redirect, Success, Fail or Error.

    Shares only the frozen `StrategyConfig` and the HTTP client between requests.
    """

    name = "cas2"

    def __init__(
        self,
        *,
        config: StrategyConfig,
        http: httpx.AsyncClient | None = None,
        validator: TicketValidator | None = None,
    ) -> None:
        self._config = config
        self._validator = validator or TicketValidator(config=config, http=http)
        self._verify = VerifyAdapter(config=config)

    @property
    def config(self) -> StrategyConfig:
        return self._config

    def login_url(self) -> str:
        return self._config.login_url()

    async def authenticate(
        self, request: SupportsQueryParams, options: Mapping[str, Any] | None = None
    ) -> AuthenticationResult:
        # `options` is part of the host contract; CAS 2.0 needs none of them.
        ticket = request.query_params.get(TICKET_PARAM)
        if not ticket:
            log.info("cas_auth_transition", state=AuthState.redirected.value)
            return Redirect(url=self.login_url())

        ctx = ValidationContext(config=self._config, request=request, ticket=ticket)
        log.info("cas_auth_transition", state=AuthState.validating.value)
        try:
            return await self._validate(ctx)
        except NetworkError as e:
            log.error("cas_auth_transition", state=AuthState.validation_error.value, error=str(e))
            return Error(e)
        except Exception as e:
            # Misconfiguration or URL-build failures must still end as a terminal result.
            log.error(
                "cas_auth_transition",
                state=AuthState.validation_error.value,
                error=str(e),
                exc_info=True,
            )
            return Error(e)

    async def _validate(self, ctx: ValidationContext) -> AuthenticationResult:
        body = await self._validator.validate(ctx.ticket, ctx.config.app_service_url)
        outcome = parse_service_response(body)
        log.info("cas_auth_transition", state=_state_after(outcome).value)

        result = await self._verify.resolve(outcome, request=ctx.request)
        log.info(
            "cas_auth_transition",
            state=AuthState.resolved.value,
            result=type(result).__name__,
        )
        return result

    async def aclose(self) -> None:
        await self._validator.aclose()


__all__ = [
    "AuthState",
    "Cas2Strategy",
    "ValidationContext",
]


# --- Module Notes -----------------------------------------------------------
# A retry after any terminal result is a new request with no ticket, which restarts
# at INIT and yields a fresh redirect.
