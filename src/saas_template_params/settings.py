"""
saas_template_params.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Select the replacement policy used by the parameter store.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

import enum
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ReplacePolicy(enum.StrEnum):
    # atomic: delete + insert in one transaction.
    # delete_then_insert: delete is committed first, inserts follow one by one (not atomic).
    atomic = "atomic"
    delete_then_insert = "delete_then_insert"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STP_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "saas-template-params"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    request_id_header: str = "x-request-id"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./template_params.db"
    database_echo: bool = False

    replace_policy: ReplacePolicy = ReplacePolicy.atomic


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `replace_policy` is read once per store instance; changing it requires a restart.
