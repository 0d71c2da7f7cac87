"""Agent Backend Client — forwards query, stream and session calls to the resolved backend.

Invariants:
    - Every outbound call recomputes headers (fresh bearer token in Agent Engine mode)
    - URLs come only from core.endpoints.endpoint_for_path
    - httpx failures mapped to BackendAPIError: timeout, connection_error, http_<status>
    - No retries; the caller decides what to do with a failure
    - open_stream returns only after the upstream status was checked
    - session_path is validated before a token is acquired or a URL is built

Design Decisions:
    - One shared httpx.AsyncClient per process (opened/closed by the lifespan)
    - Local/Cloud Run backends expose the ADK api server paths (/run, /run_sse)
"""

import logging
from typing import Any

import httpx

from agent_gateway.core.domain_types import EndpointKind
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.endpoints import (
    endpoint_for_path,
    should_use_agent_engine,
    validate_session_path,
)
from agent_gateway.core.errors import BackendAPIError, ErrorContext
from agent_gateway.infrastructure.token_provider import TokenProvider
from agent_gateway.services.auth_headers import get_auth_headers

logger = logging.getLogger(__name__)

QUERY_PATH = "/run"
STREAM_QUERY_PATH = "/run_sse"
SESSIONS_PATH = "/sessions"

_MAX_ERROR_BODY_CHARS = 500


class AgentBackendClient:
    """Sends requests to the agent backend selected by EndpointConfig."""

    def __init__(
        self,
        config: EndpointConfig,
        token_provider: TokenProvider,
        http_client: httpx.AsyncClient,
        *,
        diagnostics: bool = False,
        workload_provider: str | None = None,
    ):
        self.config = config
        self.token_provider = token_provider
        self.http = http_client
        self.diagnostics = diagnostics
        self.workload_provider = workload_provider

    async def query(self, payload: dict[str, Any]) -> Any:
        """Single-shot query, returns the decoded JSON body."""
        url = endpoint_for_path(self.config, QUERY_PATH, EndpointKind.QUERY)
        response = await self._send("POST", url, payload)
        return _decode(response)

    async def open_stream(self, payload: dict[str, Any]) -> httpx.Response:
        """Open a streamed query. Caller must aclose() the returned response."""
        url = endpoint_for_path(
            self.config, STREAM_QUERY_PATH, EndpointKind.STREAM_QUERY,
        )
        headers = await self._headers()
        request = self.http.build_request("POST", url, json=payload, headers=headers)
        context = self._context(url)
        try:
            response = await self.http.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise BackendAPIError(str(e) or "request timed out", "timeout", context=context) from e
        except httpx.RequestError as e:
            raise BackendAPIError(str(e), "connection_error", context=context) from e

        if response.is_error:
            await response.aread()
            await response.aclose()
            raise _status_error(response, context)
        logger.info(
            "Opened agent stream",
            extra={"endpoint": url, "status_code": response.status_code},
        )
        return response

    async def session_request(
        self,
        method: str,
        session_path: str = "",
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Call the sessions API; session_path is relative to the sessions collection."""
        validate_session_path(session_path)
        if should_use_agent_engine(self.config):
            url = endpoint_for_path(self.config, session_path, EndpointKind.SESSIONS)
        else:
            url = endpoint_for_path(
                self.config, f"{SESSIONS_PATH}{session_path}", EndpointKind.SESSIONS,
            )
        response = await self._send(method, url, payload)
        return _decode(response)

    async def _headers(self) -> dict[str, str]:
        return await get_auth_headers(
            self.config,
            self.token_provider,
            diagnostics=self.diagnostics,
            workload_provider=self.workload_provider,
        )

    async def _send(
        self, method: str, url: str, payload: dict[str, Any] | None,
    ) -> httpx.Response:
        headers = await self._headers()
        context = self._context(url)
        try:
            response = await self.http.request(
                method, url, json=payload, headers=headers,
            )
        except httpx.TimeoutException as e:
            raise BackendAPIError(str(e) or "request timed out", "timeout", context=context) from e
        except httpx.RequestError as e:
            raise BackendAPIError(str(e), "connection_error", context=context) from e

        if response.is_error:
            raise _status_error(response, context)
        logger.info(
            f"Agent backend {method} ok",
            extra={"endpoint": url, "status_code": response.status_code},
        )
        return response

    def _context(self, url: str) -> ErrorContext:
        return ErrorContext(
            deployment_type=self.config.deployment_type.value, endpoint=url,
        )


def _status_error(response: httpx.Response, context: ErrorContext) -> BackendAPIError:
    body = response.text[:_MAX_ERROR_BODY_CHARS]
    logger.warning(
        f"Agent backend returned {response.status_code}: {body}",
        extra={"endpoint": context.endpoint, "status_code": response.status_code},
    )
    return BackendAPIError(
        body or response.reason_phrase,
        f"http_{response.status_code}",
        status_code=response.status_code,
        context=context,
    )


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise BackendAPIError(
            "Response body is not valid JSON", "invalid_response",
            status_code=response.status_code,
        ) from e
