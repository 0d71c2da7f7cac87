"""Health Schemas — public view of the resolved endpoint configuration."""

from pydantic import BaseModel

from agent_gateway.core.domain_types import DeploymentType, Environment


class EndpointConfigResponse(BaseModel):
    deployment_type: DeploymentType
    environment: Environment
    backend_url: str
    uses_agent_engine: bool
