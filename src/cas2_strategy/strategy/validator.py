"""
cas2_strategy.strategy.validator

HTTP client boundary for CAS service-ticket validation.

Responsibilities:
- Issue the single `GET {sso_base_url}{validate_endpoint}?service=...&ticket=...` call.
- Buffer and UTF-8 decode the whole body for the parser.
- Bound the call with a timeout and surface every transport failure as `NetworkError`.
"""

from __future__ import annotations

import asyncio

import httpx

from cas2_strategy.observability.logging import get_logger, redact_ticket_in_url
from cas2_strategy.strategy.config import StrategyConfig
from cas2_strategy.strategy.errors import NetworkError

log = get_logger(__name__)


class TicketValidator:
    """
    One outbound call per ticket; no retries. A fresh attempt is a fresh login.

    The `httpx.AsyncClient` is either borrowed from the host (shared connection pool)
    or created lazily and owned by the validator.
    """

    def __init__(self, *, config: StrategyConfig, http: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._http = http
        self._owns_http = http is None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(follow_redirects=False)
        return self._http

    async def validate(self, ticket: str, service_url: str | None = None) -> str:
        url = self._config.validate_url(ticket, service_url)
        timeout = self._config.validate_timeout
        log.info("cas_validate_request", url=redact_ticket_in_url(url))

        try:
            # asyncio.timeout bounds the whole exchange; httpx.Timeout bounds each phase.
            async with asyncio.timeout(timeout):
                r = await self._client().get(url, timeout=httpx.Timeout(timeout))
                r.encoding = "utf-8"
                body = r.text
        except TimeoutError as e:
            raise NetworkError(f"validation call exceeded {timeout:g}s") from e
        except httpx.TimeoutException as e:
            raise NetworkError(f"validation call timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"validation call failed: {e}") from e

        if r.is_success:
            log.info("cas_validate_response", status=r.status_code, bytes=len(body))
        else:
            # Not distinguished further: the body still goes to the parser.
            log.warning("cas_validate_response", status=r.status_code, bytes=len(body))
        return body

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> TicketValidator:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


# --- Module Notes -----------------------------------------------------------
# The `service` value comes from `StrategyConfig.validate_url`, which shares its
# encoder with the login redirect.
