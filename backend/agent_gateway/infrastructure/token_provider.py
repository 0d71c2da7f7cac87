"""Token Provider — narrow seam over the google-auth credential exchange.

Invariants:
    - acquire_token returns the access token string, or None if the exchange yielded none
    - Exchange failures propagate as raised exceptions (mapping happens in services/)
    - No caching: every call performs a fresh credential refresh

Design Decisions:
    - google.auth.default() resolves Workload Identity Federation from the
      external_account credential config (GOOGLE_APPLICATION_CREDENTIALS)
    - Blocking refresh runs in a worker thread so the event loop keeps serving
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

import google.auth
from google.auth.transport.requests import Request

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    async def acquire_token(self, scopes: Sequence[str]) -> str | None: ...


class GoogleWorkloadIdentityTokenProvider:
    """Mints short-lived access tokens via Application Default Credentials."""

    async def acquire_token(self, scopes: Sequence[str]) -> str | None:
        return await asyncio.to_thread(self._refresh_token, list(scopes))

    def _refresh_token(self, scopes: list[str]) -> str | None:
        credentials, project_id = google.auth.default(scopes=scopes)
        credentials.refresh(Request())
        logger.debug(
            "Refreshed %s credentials (project=%s)",
            type(credentials).__name__, project_id,
        )
        return credentials.token
