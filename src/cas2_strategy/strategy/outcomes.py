"""
cas2_strategy.strategy.outcomes

Value types exchanged between the strategy's stages and returned to the host.

Responsibilities:
- `ValidationOutcome`: what the SSO server said about a ticket (success/failure/malformed).
- `AuthenticationResult`: the terminal outcome handed to the host
  (redirect/success/fail/error).
- `Strategy`: the contract a host consumes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

AttributeValue = str | None | tuple[Any, ...] | Mapping[str, Any]


def _rebuild(
    value: Any,
    *,
    mapping: Callable[[dict[str, Any]], Any],
    sequence: Callable[[Iterable[Any]], Any],
    sequence_types: tuple[type, ...],
) -> Any:
    # Iterative: decoded XML may nest deeper than the interpreter's recursion limit.
    def nested(v: Any) -> bool:
        return isinstance(v, Mapping) or isinstance(v, sequence_types)

    if not nested(value):
        return value

    # Pre-order walk; reversed, every container comes after all of its descendants.
    order: list[Any] = []
    stack = [value]
    while stack:
        node = stack.pop()
        order.append(node)
        children = node.values() if isinstance(node, Mapping) else node
        stack.extend(c for c in children if nested(c))

    built: dict[int, Any] = {}
    for node in reversed(order):
        if isinstance(node, Mapping):
            built[id(node)] = mapping(
                {k: built[id(v)] if nested(v) else v for k, v in node.items()}
            )
        else:
            built[id(node)] = sequence([built[id(v)] if nested(v) else v for v in node])
    return built[id(value)]


def freeze(value: Any) -> Any:
    """
    Deep read-only copy of decoded XML: dicts become mapping proxies, lists become tuples.
    """

    return _rebuild(value, mapping=MappingProxyType, sequence=tuple, sequence_types=(list, tuple))


def thaw(value: Any) -> Any:
    """
    Inverse of `freeze`, for handing attributes to JSON encoders or mutable user models.
    """

    return _rebuild(value, mapping=dict, sequence=list, sequence_types=(tuple,))


_EMPTY: Mapping[str, AttributeValue] = MappingProxyType({})


# --- Validation outcomes ----------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValidationSuccess:
    user: str | None = None
    attributes: Mapping[str, AttributeValue] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", freeze(self.attributes))


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    code: str
    message: str
    raw_message: str = ""


@dataclass(frozen=True, slots=True)
class ValidationMalformed:
    detail: str


ValidationOutcome = ValidationSuccess | ValidationFailure | ValidationMalformed


# --- Authentication results -------------------------------------------------


@dataclass(frozen=True, slots=True)
class Redirect:
    url: str


@dataclass(frozen=True, slots=True)
class Success:
    user: Any
    info: Any = None


@dataclass(frozen=True, slots=True)
class Fail:
    info: Any = None
    status_code: int = 401


@dataclass(frozen=True, slots=True)
class Error:
    error: BaseException


AuthenticationResult = Redirect | Success | Fail | Error


@runtime_checkable
class SupportsQueryParams(Protocol):
    """
    Minimal inbound request shape (Starlette's `Request` satisfies it).
    """

    @property
    def query_params(self) -> Mapping[str, str]: ...


@runtime_checkable
class Strategy(Protocol):
    name: str

    async def authenticate(
        self, request: SupportsQueryParams, options: Mapping[str, Any] | None = None
    ) -> AuthenticationResult: ...


# --- Module Notes -----------------------------------------------------------
# Results are returned as values; hosts pattern-match on them instead of the strategy
# calling back into mutable host state.
