"""
cas2_strategy.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the SSO server, the application service URL and
  the validation/verification timeouts.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Strategy + host settings, read from `CAS2_*` environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="CAS2_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cas2-strategy"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # SSO server
    sso_base_url: str = "https://sso.example.com"
    sso_login_url: str = "https://sso.example.com/cas/login"
    validate_endpoint: str = "/cas/serviceValidate"

    # This application's registered service URL; must match at login and validation.
    app_service_url: str = "http://localhost:8080/v1/auth/cas/login"

    pass_request_to_verify: bool = False

    # Upper bounds for the outbound validation call and the verify callback.
    validate_timeout_seconds: float = Field(default=10.0, gt=0)
    verify_timeout_seconds: float = Field(default=10.0, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `StrategyConfig.from_settings` turns this into the frozen runtime config; the
# strategy itself never reads environment variables.
