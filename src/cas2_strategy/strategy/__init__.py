"""
cas2_strategy.strategy

CAS 2.0 ticket-validation strategy.

Responsibilities:
- Login redirect and service-ticket validation (`context`, `validator`).
- Response interpretation (`parser`) and verify-function bridging (`verify`).
- Value types (`outcomes`), runtime config (`config`) and errors (`errors`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package depends on FastAPI; any host exposing `query_params` works.
