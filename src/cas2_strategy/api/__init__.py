"""
cas2_strategy.api

HTTP host for the CAS 2.0 strategy.

Responsibilities:
- FastAPI app factory and router modules.
- Translate strategy results into HTTP responses.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: it reads the request, calls the strategy and maps the result.
