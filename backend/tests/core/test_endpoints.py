"""Tests for endpoint_for_path — URL construction per deployment type and kind."""

import pytest

from agent_gateway.core.domain_types import DeploymentType, EndpointKind
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.endpoints import (
    agent_engine_sessions_url,
    agent_engine_stream_endpoint,
    endpoint_for_path,
    should_use_agent_engine,
    validate_session_path,
)
from agent_gateway.core.errors import InvalidSessionPathError, SessionsUrlError

ENGINE = "https://x.googleapis.com/v1/projects/p/locations/l/reasoningEngines/e"


def _engine_config(url: str = ENGINE) -> EndpointConfig:
    return EndpointConfig(
        backend_url=url,
        deployment_type=DeploymentType.AGENT_ENGINE,
        agent_engine_url=url,
    )


def _local_config() -> EndpointConfig:
    return EndpointConfig(
        backend_url="http://127.0.0.1:8000", deployment_type=DeploymentType.LOCAL,
    )


def test_sessions_path_uses_v1beta1_resource():
    url = endpoint_for_path(_engine_config(), "/abc", EndpointKind.SESSIONS)
    assert url == (
        "https://x.googleapis.com/v1beta1/projects/p/locations/l/"
        "reasoningEngines/e/sessions/abc"
    )


def test_sessions_collection_with_empty_path():
    url = endpoint_for_path(_engine_config(), "", EndpointKind.SESSIONS)
    assert url.endswith("/reasoningEngines/e/sessions")


def test_query_and_stream_query_suffixes():
    config = _engine_config()
    assert endpoint_for_path(config, "/ignored", EndpointKind.QUERY) == f"{ENGINE}:query"
    assert (
        endpoint_for_path(config, "/ignored", EndpointKind.STREAM_QUERY)
        == f"{ENGINE}:streamQuery"
    )


def test_default_kind_is_stream_query():
    assert endpoint_for_path(_engine_config(), "/run") == f"{ENGINE}:streamQuery"
    assert agent_engine_stream_endpoint(_engine_config()) == f"{ENGINE}:streamQuery"


def test_unmatched_engine_url_raises_for_sessions():
    config = _engine_config("https://x.googleapis.com/v2/engines/e")
    assert agent_engine_sessions_url(config) is None
    with pytest.raises(SessionsUrlError) as exc_info:
        endpoint_for_path(config, "/abc", EndpointKind.SESSIONS)
    assert exc_info.value.message == "Could not construct sessions API URL"


def test_unmatched_engine_url_still_serves_query():
    config = _engine_config("https://x.googleapis.com/v2/engines/e")
    assert endpoint_for_path(config, "", EndpointKind.QUERY).endswith(":query")


def test_plain_http_engine_url_does_not_match_sessions_pattern():
    config = _engine_config(ENGINE.replace("https://", "http://"))
    with pytest.raises(SessionsUrlError):
        endpoint_for_path(config, "/abc", EndpointKind.SESSIONS)


@pytest.mark.parametrize("kind", list(EndpointKind))
def test_non_engine_modes_concatenate_backend_url(kind):
    assert endpoint_for_path(_local_config(), "/run_sse", kind) == "http://127.0.0.1:8000/run_sse"


def test_cloud_run_concatenates_backend_url():
    config = EndpointConfig(
        backend_url="https://agent.a.run.app",
        deployment_type=DeploymentType.CLOUD_RUN,
        agent_engine_url=None,
    )
    assert not should_use_agent_engine(config)
    assert endpoint_for_path(config, "/sessions/1", EndpointKind.SESSIONS) == (
        "https://agent.a.run.app/sessions/1"
    )


def test_should_use_agent_engine_only_in_engine_mode():
    assert should_use_agent_engine(_engine_config())
    assert not should_use_agent_engine(_local_config())


# ─── Session paths ──────────────────────────────────────────────

@pytest.mark.parametrize("path", [
    "", "/abc", "/abc/events", "/8812345678901234567", "/s-1_a.b", "/operations/op:1",
])
def test_plain_session_paths_are_accepted(path):
    assert validate_session_path(path) == path


@pytest.mark.parametrize("path", [
    "/..", "/../", "/.", "/abc/..", "/abc/../..", "abc", "/", "//abc",
    "/abc?x=1", "/abc#frag", "/a\\b", "/abc%2F..", "/abc\n", "/-x",
])
def test_session_paths_leaving_the_collection_are_rejected(path):
    with pytest.raises(InvalidSessionPathError) as exc_info:
        validate_session_path(path)
    assert exc_info.value.http_status == 400
    assert exc_info.value.code == "VALIDATION_ERROR"
