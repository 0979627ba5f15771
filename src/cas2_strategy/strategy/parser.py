"""
cas2_strategy.strategy.parser

CAS 2.0 `serviceValidate` response interpretation.

Responsibilities:
- Decode the XML body with normalized tag names (no namespace prefix, lower-case)
  and collapsed whitespace.
- Turn the decoded document into exactly one `ValidationOutcome`.
- Never raise: decoder errors and unexpected shapes become `ValidationMalformed`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from cas2_strategy.observability.logging import get_logger
from cas2_strategy.strategy.errors import INVALID_TICKET
from cas2_strategy.strategy.outcomes import (
    ValidationFailure,
    ValidationMalformed,
    ValidationOutcome,
    ValidationSuccess,
)

log = get_logger(__name__)

MESSAGE_TIMED_OUT = "Authentication timed out"
MESSAGE_FAILED = "Authentication failed"

_ATTR_PREFIX = "@"
_TEXT_KEY = "#text"


def normalize_name(name: str) -> str:
    """
    `cas:authenticationSuccess` -> `authenticationsuccess`; `@xmlns:cas` -> `@cas`.
    """

    prefix = _ATTR_PREFIX if name.startswith(_ATTR_PREFIX) else ""
    bare = name[len(prefix) :].rsplit(":", 1)[-1]
    return prefix + bare.lower()


def normalize_text(value: str) -> str:
    return " ".join(value.split())


def _postprocess(_path: Any, key: str, value: Any) -> tuple[str, Any]:
    if key != _TEXT_KEY:
        key = normalize_name(key)
    if isinstance(value, str):
        value = normalize_text(value)
    return key, value


def decode(raw: str) -> dict[str, Any]:
    """
    Decode XML into nested dicts. A repeated child name yields a list, a single one a scalar.

    Raises `ExpatError` (or `ValueError` for rejected constructs) on malformed XML.
    """

    return xmltodict.parse(
        raw,
        postprocessor=_postprocess,
        attr_prefix=_ATTR_PREFIX,
        cdata_key=_TEXT_KEY,
        disable_entities=True,
    )


def _first(value: Any) -> Any:
    # A repeated outcome element is unusual; the first occurrence decides.
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _element_text(element: Any) -> str:
    if isinstance(element, Mapping):
        text = element.get(_TEXT_KEY)
        return text if isinstance(text, str) else ""
    return element if isinstance(element, str) else ""


def parse_service_response(raw: str | None) -> ValidationOutcome:
    if not raw or not raw.strip():
        return ValidationMalformed(detail="empty validation response")

    try:
        document = decode(raw)
    except (ExpatError, ValueError) as e:
        log.error("cas_response_decode_failed", error=str(e))
        return ValidationMalformed(detail=f"validation response is not well-formed XML: {e}")

    service_response = document.get("serviceresponse") if isinstance(document, Mapping) else None
    if not isinstance(service_response, Mapping):
        return ValidationMalformed(detail="validation response has no <cas:serviceResponse> root")

    # Failure takes precedence even when a success element is also present.
    if "authenticationfailure" in service_response:
        failure = _first(service_response["authenticationfailure"])
        code = ""
        if isinstance(failure, Mapping):
            code = str(failure.get(_ATTR_PREFIX + "code") or "")
        message = MESSAGE_TIMED_OUT if code == INVALID_TICKET else MESSAGE_FAILED
        return ValidationFailure(code=code, message=message, raw_message=_element_text(failure))

    if "authenticationsuccess" in service_response:
        success = _first(service_response["authenticationsuccess"])
        if not isinstance(success, Mapping):
            return ValidationSuccess()
        user = _first(success.get("user"))
        attributes = _first(success.get("attributes"))
        return ValidationSuccess(
            user=_element_text(user) or None,
            attributes=attributes if isinstance(attributes, Mapping) else {},
        )

    return ValidationMalformed(
        detail="validation response has neither authenticationSuccess nor authenticationFailure"
    )


# --- Module Notes -----------------------------------------------------------
# Attribute values keep the decoder's shape: a scalar for a single element, a tuple
# for a repeated one, a mapping for nested elements. Verify functions must accept both
# scalar and tuple forms.
