"""Health & Readiness Probes — liveness, readiness and resolved-config endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until the endpoint config is loaded (readiness)
    - GET /health/config never exposes credentials
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from agent_gateway.api.dependencies import get_endpoint_config
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.endpoints import should_use_agent_engine
from agent_gateway.schemas.health import EndpointConfigResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "agent-gateway",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    config = getattr(request.app.state, "endpoint_config", None)
    if config is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "endpoint_config_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"deployment_type": config.deployment_type.value},
    }


@router.get("/config", response_model=EndpointConfigResponse)
async def endpoint_config(config: EndpointConfig = Depends(get_endpoint_config)):
    return EndpointConfigResponse(
        deployment_type=config.deployment_type,
        environment=config.environment,
        backend_url=config.backend_url,
        uses_agent_engine=should_use_agent_engine(config),
    )
