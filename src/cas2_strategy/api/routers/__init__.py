"""
cas2_strategy.api.routers

Route modules for the CAS host.
"""

# Package marker.
