"""
tests.test_logging

Service tickets never reach log output.
"""

from __future__ import annotations

from cas2_strategy.observability.logging import REDACTED, redact_ticket_in_url, redact_tickets


def test_ticket_field_is_masked() -> None:
    event = redact_tickets(None, "info", {"event": "x", "ticket": "ST-123"})

    assert event["ticket"] == REDACTED


def test_ticket_in_url_is_masked() -> None:
    url = "https://sso.example.com/cas/serviceValidate?service=https%3A%2F%2Fa&ticket=ST-123-abc"

    assert redact_ticket_in_url(url).endswith("&ticket=***")
    assert "ST-123" not in redact_tickets(None, "info", {"url": url})["url"]


def test_other_fields_are_untouched() -> None:
    event = {"event": "cas_validate_response", "status": 200, "path": "/v1/auth/cas/login"}

    assert redact_tickets(None, "info", dict(event)) == event
