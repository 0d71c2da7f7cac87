"""Dependencies — expose lifespan-built state to route handlers.

Invariants:
    - EndpointConfig and AgentBackendClient are created once in the lifespan
    - Missing state means the lifespan did not run: ConfigurationError, never a rebuild
"""

from fastapi import Request

from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.errors import ConfigurationError
from agent_gateway.services.backend_client import AgentBackendClient


def get_endpoint_config(request: Request) -> EndpointConfig:
    config = getattr(request.app.state, "endpoint_config", None)
    if config is None:
        raise ConfigurationError("Endpoint configuration not loaded")
    return config


def get_backend_client(request: Request) -> AgentBackendClient:
    client = getattr(request.app.state, "backend_client", None)
    if client is None:
        raise ConfigurationError("Agent backend client not initialized")
    return client
