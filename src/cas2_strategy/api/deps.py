"""
cas2_strategy.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the strategy instance to routes.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from cas2_strategy.strategy.context import Cas2Strategy


def strategy_dep(request: Request) -> Cas2Strategy:
    # The strategy is created on app startup in `cas2_strategy.api.app.create_app`.
    return request.app.state.strategy  # type: ignore[attr-defined]
