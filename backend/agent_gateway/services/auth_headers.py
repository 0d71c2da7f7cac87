"""Auth Headers — per-request header computation, bearer token only for Agent Engine.

Invariants:
    - Content-Type: application/json is always present
    - Authorization is attached only in AGENT_ENGINE mode and only after a token was obtained
    - Any exchange failure or empty token raises AuthenticationError (cause chained)
    - No retry, no caching: each call acquires a fresh token
"""

import logging

from agent_gateway.core.domain_types import CLOUD_PLATFORM_SCOPE, DeploymentType
from agent_gateway.core.endpoint_config import EndpointConfig
from agent_gateway.core.errors import AuthenticationError, ErrorContext
from agent_gateway.infrastructure.token_provider import TokenProvider

logger = logging.getLogger(__name__)

_PROVIDER_PREVIEW_CHARS = 50


async def get_auth_headers(
    config: EndpointConfig,
    token_provider: TokenProvider,
    *,
    diagnostics: bool = False,
    workload_provider: str | None = None,
) -> dict[str, str]:
    """Return outbound headers for the configured backend."""
    headers = {"Content-Type": "application/json"}

    if config.deployment_type is not DeploymentType.AGENT_ENGINE:
        return headers

    if diagnostics:
        logger.info("[WIF] Getting access token via Workload Identity Federation")
        logger.info(
            "[WIF] Workload provider: %s...",
            (workload_provider or "")[:_PROVIDER_PREVIEW_CHARS],
        )

    context = ErrorContext(
        deployment_type=config.deployment_type.value,
        endpoint=config.agent_engine_url,
    )
    try:
        token = await token_provider.acquire_token([CLOUD_PLATFORM_SCOPE])
    except Exception as e:
        _log_failure(e)
        raise AuthenticationError(str(e), context=context) from e

    if not token:
        cause = "No access token returned from credential exchange"
        _log_failure(cause)
        raise AuthenticationError(cause, context=context)

    if diagnostics:
        logger.info("[WIF] Successfully obtained access token")
    return {**headers, "Authorization": f"Bearer {token}"}


def _log_failure(cause: object) -> None:
    logger.error(
        f"[WIF] Failed to get Google Cloud access token: {cause}",
        extra={"error_code": "AUTHENTICATION_FAILED"},
    )
    logger.error(
        "Make sure GOOGLE_CLOUD_WORKLOAD_PROVIDER and the external account "
        "credential config are set in the environment.",
    )
