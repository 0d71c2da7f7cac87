"""Agent Routes — query and streaming query proxied to the resolved backend.

Invariants:
    - Auth/URL errors surface as JSON errors before any stream byte is sent
    - Upstream stream is closed when the relay ends: completion, upstream
      read error, or client disconnect
"""

from collections.abc import AsyncIterator

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from agent_gateway.api.dependencies import get_backend_client
from agent_gateway.schemas.agent import AgentRequest
from agent_gateway.services.backend_client import AgentBackendClient

router = APIRouter(prefix="/api/v1/agent", tags=["agent"])

# Prevent proxy/browser buffering of streamed chunks.
_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


async def _relay(upstream: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()


@router.post("/query")
async def query(
    body: AgentRequest, client: AgentBackendClient = Depends(get_backend_client),
):
    return await client.query(body.to_payload())


@router.post("/stream")
async def stream_query(
    body: AgentRequest, client: AgentBackendClient = Depends(get_backend_client),
):
    """Pass the backend stream through unchanged (SSE or newline-delimited JSON)."""
    upstream = await client.open_stream(body.to_payload())
    return StreamingResponse(
        _relay(upstream),
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", "text/event-stream"),
        headers=_STREAM_HEADERS,
    )
