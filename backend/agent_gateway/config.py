"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All deployment selectors come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - EndpointEnvironment is NOT cached: the lifespan reads it once and builds
      an immutable EndpointConfig from it
    - Blank variables are treated as unset

Design Decisions:
    - Variable names are the deployment tooling contract (K_SERVICE, AGENT_ENGINE_ENDPOINT, ...)
    - NODE_ENV kept as the diagnostics switch so frontend and gateway share one flag
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    node_env: str = "production"

    # Workload Identity Federation provider, only echoed (truncated) in diagnostics
    google_cloud_workload_provider: str | None = None

    # Outbound
    backend_timeout_seconds: float = 300.0

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def diagnostics_enabled(self) -> bool:
        return self.node_env == "development"


class EndpointEnvironment(BaseSettings):
    """Raw deployment selector variables, one field per environment variable."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    google_cloud_project: str | None = None
    k_service: str | None = None
    function_name: str | None = None
    agent_engine_endpoint: str | None = None
    cloud_run_service: str | None = None
    cloud_run_service_url: str | None = None
    backend_url: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
