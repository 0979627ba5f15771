"""
cas2_strategy.strategy.errors

Domain exceptions for CAS ticket validation.

Responsibilities:
- Name each failure class the strategy can surface to a host.
- Map a protocol-level failure outcome onto its exception subtype.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cas2_strategy.strategy.outcomes import ValidationFailure

INVALID_TICKET = "INVALID_TICKET"


class CasError(Exception):
    pass


class NetworkError(CasError):
    """
    Transport failure (connect, TLS, I/O, timeout) during the validation call.
    """


class MalformedResponseError(CasError):
    """
    The validation response was not XML, or had neither a success nor a failure element.
    """


@dataclass(frozen=True, slots=True)
class ProtocolFailure(CasError):
    """
    The SSO server answered with `<cas:authenticationFailure>`.
    """

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code or 'UNKNOWN'}: {self.message}"

    @staticmethod
    def from_outcome(outcome: ValidationFailure) -> ProtocolFailure:
        if outcome.code == INVALID_TICKET:
            return InvalidTicket(code=outcome.code, message=outcome.message)
        return ProtocolFailure(code=outcome.code, message=outcome.message)


class InvalidTicket(ProtocolFailure):
    pass


class VerifyCallbackError(CasError):
    """
    Raised or signalled by the application's verify function, or the function never completed.
    """


# --- Module Notes -----------------------------------------------------------
# Network/Malformed/VerifyCallback errors become `Error` results. ProtocolFailure is
# never raised: `from_outcome` only classifies a rejection for logging, and the
# rejection itself reaches hosts as `Fail({"message": ...}, 401)`. None of these
# errors escape `Cas2Strategy.authenticate`.
