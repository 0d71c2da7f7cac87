"""Endpoint Routing — maps (logical path, operation kind) to a fully qualified URL.

Invariants:
    - Agent Engine mode: query/streamQuery use method suffixes on the engine URL,
      sessions use the v1beta1 resource path
    - Every other mode: backend_url + path, kind ignored
    - Unparseable engine URL for sessions raises SessionsUrlError (never guesses)
    - Session paths are plain id segments: no dot segments, separators or query characters
"""

import re

from agent_gateway.core.domain_types import (
    SESSIONS_API_VERSION,
    DeploymentType,
    EndpointKind,
)
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.errors import InvalidSessionPathError, SessionsUrlError

# https://<host>/v1/projects/<p>/locations/<l>/reasoningEngines/<id>
_ENGINE_URL_RE = re.compile(
    r"^(https://[^/]+)/v1/"
    r"(projects/[^/]+/locations/[^/]+/reasoningEngines/[^/]+)"
)

# Session ids, "events", operation names. Never "." or "..".
_SESSION_SEGMENT_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.:@-]*")


def should_use_agent_engine(config: EndpointConfig) -> bool:
    return (
        config.deployment_type is DeploymentType.AGENT_ENGINE
        and bool(config.agent_engine_url)
    )


def agent_engine_sessions_url(config: EndpointConfig) -> str | None:
    """v1beta1 base for the sessions API, or None if the engine URL does not match."""
    if not config.agent_engine_url:
        return None
    match = _ENGINE_URL_RE.match(config.agent_engine_url)
    if not match:
        return None
    host, resource_path = match.groups()
    return f"{host}/{SESSIONS_API_VERSION}/{resource_path}"


def endpoint_for_path(
    config: EndpointConfig,
    path: str,
    kind: EndpointKind = EndpointKind.STREAM_QUERY,
) -> str:
    if should_use_agent_engine(config):
        if kind is EndpointKind.STREAM_QUERY:
            return f"{config.agent_engine_url}:streamQuery"
        if kind is EndpointKind.QUERY:
            return f"{config.agent_engine_url}:query"
        sessions_url = agent_engine_sessions_url(config)
        if not sessions_url:
            raise SessionsUrlError(config.agent_engine_url)
        return f"{sessions_url}/sessions{path}"

    return f"{config.backend_url}{path}"


def agent_engine_stream_endpoint(config: EndpointConfig) -> str:
    return endpoint_for_path(config, "", EndpointKind.STREAM_QUERY)


def validate_session_path(session_path: str) -> str:
    """Return session_path unchanged if every segment is a plain identifier.

    "" addresses the collection itself; otherwise the path must be "/seg[/seg...]".
    """
    if not session_path:
        return session_path
    segments = session_path.split("/")
    if segments[0] != "" or not all(
        _SESSION_SEGMENT_RE.fullmatch(segment) for segment in segments[1:]
    ):
        raise InvalidSessionPathError(session_path)
    return session_path
