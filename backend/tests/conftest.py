"""Root conftest — shared test configuration.

Invariants:
    - Every deployment selector variable is cleared before each test, so the
      host's own environment (Cloud Run, Cloud Shell, ...) never leaks in
    - Each test runs from an empty working directory, so a developer .env file
      next to the repo is never read by pydantic-settings
"""

import pytest

from tests.fakes import StaticTokenProvider

ENDPOINT_VARIABLES = (
    "GOOGLE_CLOUD_PROJECT",
    "K_SERVICE",
    "FUNCTION_NAME",
    "AGENT_ENGINE_ENDPOINT",
    "CLOUD_RUN_SERVICE",
    "CLOUD_RUN_SERVICE_URL",
    "BACKEND_URL",
    "GOOGLE_CLOUD_WORKLOAD_PROVIDER",
    "NODE_ENV",
)


@pytest.fixture(autouse=True)
def clean_endpoint_env(monkeypatch, tmp_path):
    for name in ENDPOINT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def token_provider():
    return StaticTokenProvider()
