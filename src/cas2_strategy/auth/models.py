"""
cas2_strategy.auth.models

Auth domain models and the default verify function.

Responsibilities:
- Define the identity type (`CasUser`) produced from validated CAS attributes.
- Provide `default_verify`, the verify function used when the host is not given one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from cas2_strategy.strategy.outcomes import thaw

# Attribute names tried, in order, for the subject identifier.
SUBJECT_ATTRIBUTES: tuple[str, ...] = ("uid", "user", "username", "email")


@dataclass(frozen=True, slots=True)
class CasUser:
    """
    Authenticated caller identity.
    """

    subject: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def values(self, name: str) -> list[Any]:
        # Attributes may be single-valued (scalar) or multi-valued (list).
        value = self.attributes.get(name)
        if value is None:
            return []
        return list(value) if isinstance(value, list) else [value]


def subject_from(attributes: Mapping[str, Any]) -> str | None:
    for name in SUBJECT_ATTRIBUTES:
        value = attributes.get(name)
        if isinstance(value, tuple | list):
            value = value[0] if value else None
        if isinstance(value, str) and value:
            return value
    return None


def default_verify(attributes: Mapping[str, Any], done: Callable[..., Any]) -> None:
    subject = subject_from(attributes)
    if subject is None:
        done(None, False, {"message": "No user identifier in CAS attributes"})
        return
    done(None, CasUser(subject=subject, attributes=thaw(attributes)), {"message": "Authenticated"})


# --- Module Notes -----------------------------------------------------------
# Presence checks only: attribute values are not validated beyond being non-empty.
