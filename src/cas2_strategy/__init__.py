"""
cas2_strategy

Top-level package for the CAS 2.0 authentication strategy.

Responsibilities:
- Expose package version metadata.
- Re-export the strategy entry point for host applications.
"""

from cas2_strategy.strategy.config import StrategyConfig
from cas2_strategy.strategy.context import Cas2Strategy

__all__ = ["Cas2Strategy", "StrategyConfig", "__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Host applications normally only need `Cas2Strategy` and `StrategyConfig`; the
# FastAPI adapter under `cas2_strategy.api` is optional.
