"""Agent Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - EndpointConfig built once in the lifespan; a ConfigurationError aborts startup
    - One httpx.AsyncClient per process, closed on shutdown
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Lifespan over @app.on_event (FastAPI recommended pattern)
    - Config, token provider and client stored on app.state and injected via
      api/dependencies.py; tests override the dependencies instead of the environment
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_gateway.api.error_handlers import register_error_handlers
from agent_gateway.api.routes import agent, health, sessions
from agent_gateway.config import get_settings
from agent_gateway.core.endpoint_config import create_endpoint_config
from agent_gateway.infrastructure.observability import setup_logging
from agent_gateway.infrastructure.token_provider import GoogleWorkloadIdentityTokenProvider
from agent_gateway.services.backend_client import AgentBackendClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    config = create_endpoint_config()
    if settings.diagnostics_enabled:
        logger.info(f"Endpoint configuration: {config.to_log_dict()}")

    http_client = httpx.AsyncClient(timeout=settings.backend_timeout_seconds)
    app.state.endpoint_config = config
    app.state.backend_client = AgentBackendClient(
        config,
        GoogleWorkloadIdentityTokenProvider(),
        http_client,
        diagnostics=settings.diagnostics_enabled,
        workload_provider=settings.google_cloud_workload_provider,
    )
    logger.info(
        "Agent Gateway started",
        extra={
            "deployment_type": config.deployment_type.value,
            "environment": config.environment.value,
        },
    )
    try:
        yield
    finally:
        await http_client.aclose()
        logger.info("Agent Gateway shutting down")


app = FastAPI(
    title="Agent Gateway", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(agent.router)
app.include_router(sessions.router)

register_error_handlers(app)
