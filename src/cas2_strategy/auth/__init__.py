"""
cas2_strategy.auth

Identity resolution for the bundled host.

Responsibilities:
- Default verify function turning CAS attributes into a `CasUser`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Applications replace `default_verify` with their own user lookup.
