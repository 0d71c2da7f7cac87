"""Tests for get_auth_headers — bearer token only in Agent Engine mode.

Invariants:
    - Non-engine modes never call the token provider and never emit Authorization
    - Engine mode requests exactly the cloud-platform scope on every call
    - Empty token or provider failure raises AuthenticationError
"""

import logging

import pytest

from agent_gateway.core.domain_types import DeploymentType
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.errors import AuthenticationError
from agent_gateway.services.auth_headers import get_auth_headers

from tests.fakes import ENGINE_URL, FailingTokenProvider, StaticTokenProvider

SCOPE = "https://www.googleapis.com/auth/cloud-platform"


@pytest.fixture
def engine_config():
    return EndpointConfig(
        backend_url=ENGINE_URL,
        deployment_type=DeploymentType.AGENT_ENGINE,
        agent_engine_url=ENGINE_URL,
    )


@pytest.mark.parametrize("deployment_type", [DeploymentType.LOCAL, DeploymentType.CLOUD_RUN])
@pytest.mark.parametrize(
    "provider",
    [
        StaticTokenProvider("tok"),
        StaticTokenProvider(None),
        FailingTokenProvider(RuntimeError("boom")),
    ],
)
async def test_non_engine_headers_never_carry_authorization(deployment_type, provider):
    config = EndpointConfig(
        backend_url="http://127.0.0.1:8000", deployment_type=deployment_type,
    )
    headers = await get_auth_headers(config, provider)
    assert headers == {"Content-Type": "application/json"}


async def test_non_engine_mode_does_not_call_provider():
    provider = StaticTokenProvider()
    config = EndpointConfig(
        backend_url="http://127.0.0.1:8000", deployment_type=DeploymentType.LOCAL,
    )
    await get_auth_headers(config, provider)
    assert provider.calls == []


async def test_engine_mode_attaches_bearer_token(engine_config):
    provider = StaticTokenProvider("ya29.abc")
    headers = await get_auth_headers(engine_config, provider)
    assert headers == {
        "Content-Type": "application/json",
        "Authorization": "Bearer ya29.abc",
    }
    assert provider.calls == [[SCOPE]]


async def test_engine_mode_reacquires_token_every_call(engine_config):
    provider = StaticTokenProvider("ya29.abc")
    await get_auth_headers(engine_config, provider)
    await get_auth_headers(engine_config, provider)
    assert len(provider.calls) == 2


@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token_raises_authentication_error(engine_config, token):
    with pytest.raises(AuthenticationError) as exc_info:
        await get_auth_headers(engine_config, StaticTokenProvider(token))
    assert exc_info.value.message.startswith("Authentication failed: ")
    assert "No access token" in exc_info.value.message


async def test_provider_failure_is_wrapped_with_cause(engine_config):
    cause = RuntimeError("Unable to exchange external account token")
    provider = FailingTokenProvider(cause)
    with pytest.raises(AuthenticationError) as exc_info:
        await get_auth_headers(engine_config, provider)
    assert exc_info.value.message == (
        "Authentication failed: Unable to exchange external account token"
    )
    assert exc_info.value.__cause__ is cause
    assert exc_info.value.context.deployment_type == "agent_engine"
    assert provider.calls == 1


async def test_failure_is_logged_without_retry(engine_config, caplog):
    provider = FailingTokenProvider(RuntimeError("denied"))
    with caplog.at_level(logging.ERROR):
        with pytest.raises(AuthenticationError):
            await get_auth_headers(engine_config, provider)
    assert provider.calls == 1
    assert any("denied" in r.getMessage() for r in caplog.records)


async def test_diagnostics_truncate_workload_provider(engine_config, caplog):
    provider_name = "projects/1/locations/global/workloadIdentityPools/" + "p" * 80
    with caplog.at_level(logging.INFO):
        await get_auth_headers(
            engine_config, StaticTokenProvider("tok"),
            diagnostics=True, workload_provider=provider_name,
        )
    messages = [r.getMessage() for r in caplog.records]
    assert any(provider_name[:50] + "..." in m for m in messages)
    assert not any(provider_name in m for m in messages)
    assert any("Successfully obtained" in m for m in messages)
