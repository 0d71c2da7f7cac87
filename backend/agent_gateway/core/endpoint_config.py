"""Endpoint Config — one-shot derivation of the backend target from the environment.

Invariants:
    - Deployment type priority: AGENT_ENGINE_ENDPOINT > K_SERVICE/CLOUD_RUN_SERVICE > local
    - deployment_type == AGENT_ENGINE implies agent_engine_url is set
    - backend_url is always an absolute http(s) URL
    - EndpointConfig is frozen; nothing re-derives it mid-process

Design Decisions:
    - Functions take EndpointEnvironment instead of reading os.environ, so every
      deployment permutation is testable without touching the process environment
    - Missing Agent Engine endpoint raises immediately; Cloud Run degrades to the
      generic BACKEND_URL and then to the local default
"""

from dataclasses import dataclass
from urllib.parse import urlparse

from agent_gateway.config import EndpointEnvironment
from agent_gateway.core.domain_types import (
    DEFAULT_BACKEND_URL,
    DeploymentType,
    Environment,
)
from agent_gateway.core.errors import ConfigurationError, ErrorContext, MissingEndpointError


@dataclass(frozen=True)
class EndpointConfig:
    """Resolved backend target for the lifetime of the process."""
    backend_url: str
    deployment_type: DeploymentType
    environment: Environment = Environment.LOCAL
    agent_engine_url: str | None = None

    def __post_init__(self):
        if self.deployment_type is DeploymentType.AGENT_ENGINE and not self.agent_engine_url:
            raise MissingEndpointError(
                "AGENT_ENGINE_ENDPOINT", DeploymentType.AGENT_ENGINE.value,
            )
        parsed = urlparse(self.backend_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Backend URL must be an absolute http(s) URL, got {self.backend_url!r}",
                context=ErrorContext(
                    deployment_type=self.deployment_type.value,
                    endpoint=self.backend_url,
                ),
            )

    def to_log_dict(self) -> dict:
        return {
            "backend_url": self.backend_url,
            "agent_engine_url": self.agent_engine_url,
            "environment": self.environment.value,
            "deployment_type": self.deployment_type.value,
        }


def detect_environment(env: EndpointEnvironment) -> Environment:
    if env.google_cloud_project or env.k_service or env.function_name:
        return Environment.CLOUD
    return Environment.LOCAL


def detect_deployment_type(env: EndpointEnvironment) -> DeploymentType:
    """First match wins; no further disambiguation."""
    if env.agent_engine_endpoint:
        return DeploymentType.AGENT_ENGINE
    if env.k_service or env.cloud_run_service:
        return DeploymentType.CLOUD_RUN
    return DeploymentType.LOCAL


def resolve_backend_url(
    env: EndpointEnvironment, deployment_type: DeploymentType,
) -> str:
    """Backend base URL for the given deployment type.

    Raises MissingEndpointError for AGENT_ENGINE without AGENT_ENGINE_ENDPOINT.
    """
    if deployment_type is DeploymentType.AGENT_ENGINE:
        if env.agent_engine_endpoint:
            return env.agent_engine_endpoint
        raise MissingEndpointError(
            "AGENT_ENGINE_ENDPOINT", DeploymentType.AGENT_ENGINE.value,
        )
    if deployment_type is DeploymentType.CLOUD_RUN and env.cloud_run_service_url:
        return env.cloud_run_service_url
    return env.backend_url or DEFAULT_BACKEND_URL


def create_endpoint_config(env: EndpointEnvironment | None = None) -> EndpointConfig:
    """Build the process-wide EndpointConfig (reads the environment when env is None)."""
    env = env if env is not None else EndpointEnvironment()
    deployment_type = detect_deployment_type(env)
    return EndpointConfig(
        backend_url=resolve_backend_url(env, deployment_type),
        deployment_type=deployment_type,
        environment=detect_environment(env),
        agent_engine_url=env.agent_engine_endpoint,
    )
