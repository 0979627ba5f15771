"""
cas2_strategy.observability

Observability package.

Responsibilities:
- Structured logging configuration (with service-ticket redaction).
- Request context propagation for consistent log enrichment.
"""

# Package marker.
