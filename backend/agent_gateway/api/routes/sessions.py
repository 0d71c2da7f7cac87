"""Session Routes — list/create/get/delete sessions on the agent backend.

Invariants:
    - session_path is forwarded relative to the sessions collection
    - Agent Engine mode uses the v1beta1 sessions API; other modes use <backend>/sessions
"""

from fastapi import APIRouter, Depends, status

from agent_gateway.api.dependencies import get_backend_client
from agent_gateway.schemas.agent import SessionCreate
from agent_gateway.services.backend_client import AgentBackendClient

router = APIRouter(prefix="/api/v1/agent/sessions", tags=["sessions"])


@router.get("")
async def list_sessions(
    client: AgentBackendClient = Depends(get_backend_client),
):
    return await client.session_request("GET")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    body: SessionCreate,
    client: AgentBackendClient = Depends(get_backend_client),
):
    return await client.session_request(
        "POST", payload=body.to_payload(),
    )


@router.get("/{session_path:path}")
async def get_session(
    session_path: str,
    client: AgentBackendClient = Depends(get_backend_client),
):
    return await client.session_request("GET", f"/{session_path}")


@router.delete("/{session_path:path}")
async def delete_session(
    session_path: str,
    client: AgentBackendClient = Depends(get_backend_client),
):
    return await client.session_request("DELETE", f"/{session_path}")
