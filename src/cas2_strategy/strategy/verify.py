"""
cas2_strategy.strategy.verify

Bridge between a validation outcome and the host's terminal result.

Responsibilities:
- Call the application's verify function for successful validations.
- Offer it a one-shot completion handle backed by an `asyncio.Future`.
- Normalize every outcome into exactly one `AuthenticationResult`.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

from cas2_strategy.observability.logging import get_logger
from cas2_strategy.strategy.config import StrategyConfig
from cas2_strategy.strategy.errors import MalformedResponseError, ProtocolFailure, VerifyCallbackError
from cas2_strategy.strategy.outcomes import (
    AuthenticationResult,
    Error,
    Fail,
    Success,
    SupportsQueryParams,
    ValidationFailure,
    ValidationMalformed,
    ValidationOutcome,
    ValidationSuccess,
)

log = get_logger(__name__)

UNAUTHORIZED = 401


class Completion:
    """
    Callable handed to verify functions as `done(error=None, user=None, info=None)`.

    Only the first call is delivered; later calls are logged and return False.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[AuthenticationResult] = (
            asyncio.get_running_loop().create_future()
        )

    @property
    def resolved(self) -> bool:
        return self._future.done()

    def __call__(self, error: BaseException | None = None, user: Any = None, info: Any = None) -> bool:
        if self._future.done():
            log.warning("cas_verify_completion_repeated", error=repr(error), has_user=bool(user))
            return False

        if error is not None:
            cause = error if isinstance(error, BaseException) else VerifyCallbackError(str(error))
            wrapped = VerifyCallbackError(f"verify callback reported an error: {cause}")
            wrapped.__cause__ = cause
            self._future.set_result(Error(wrapped))
        elif not user:
            self._future.set_result(Fail(info=info, status_code=UNAUTHORIZED))
        else:
            self._future.set_result(Success(user=user, info=info))
        return True

    def fail_with(self, error: VerifyCallbackError) -> None:
        if not self._future.done():
            self._future.set_result(Error(error))

    async def wait(self, timeout: float) -> AuthenticationResult:
        try:
            # shield: a timeout must not cancel the future a late `done` call may still hit.
            return await asyncio.wait_for(asyncio.shield(self._future), timeout)
        except TimeoutError:
            self.fail_with(VerifyCallbackError(f"verify callback did not complete within {timeout:g}s"))
            return self._future.result()


class VerifyAdapter:
    def __init__(self, *, config: StrategyConfig) -> None:
        self._config = config

    async def resolve(
        self, outcome: ValidationOutcome, *, request: SupportsQueryParams
    ) -> AuthenticationResult:
        if isinstance(outcome, ValidationFailure):
            # No identity to verify; the verify function is bypassed.
            failure = ProtocolFailure.from_outcome(outcome)
            log.info("cas_ticket_rejected", code=failure.code, reason=type(failure).__name__)
            return Fail(info={"message": outcome.message}, status_code=UNAUTHORIZED)
        if isinstance(outcome, ValidationMalformed):
            log.error("cas_response_malformed", detail=outcome.detail)
            return Error(MalformedResponseError(outcome.detail))
        if isinstance(outcome, ValidationSuccess):
            return await self._verify(outcome, request=request)
        raise TypeError(f"unexpected validation outcome: {outcome!r}")

    async def _verify(
        self, outcome: ValidationSuccess, *, request: SupportsQueryParams
    ) -> AuthenticationResult:
        done = Completion()
        args: tuple[Any, ...] = (outcome.attributes, done)
        if self._config.pass_request_to_verify:
            args = (request, *args)

        # The verify timeout bounds the function itself, not just the wait after it returns.
        task = asyncio.create_task(self._call_verify(args, done))
        try:
            result = await done.wait(self._config.verify_timeout)
        finally:
            # Resolved or timed out: nothing the function still does can change the result.
            task.cancel()

        if isinstance(result, Error):
            log.error("cas_verify_error", error=str(result.error))
        return result

    async def _call_verify(self, args: tuple[Any, ...], done: Completion) -> None:
        try:
            returned = self._config.verify(*args)
            if inspect.isawaitable(returned):
                await returned
        except Exception as e:
            log.error("cas_verify_raised", error=str(e), exc_info=True)
            error = VerifyCallbackError(f"verify callback raised: {e}")
            error.__cause__ = e
            done.fail_with(error)


# --- Module Notes -----------------------------------------------------------
# The verify function receives only the attribute mapping (plus the request when
# `pass_request_to_verify` is set); values may be scalars or tuples.
