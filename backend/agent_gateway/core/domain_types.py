"""Domain Types — enums and constants shared by the resolver and its callers.

Invariants:
    - Enum values are the literal strings exposed in logs and /health/config
    - EndpointKind values match the Agent Engine method suffixes
"""

from enum import Enum


DEFAULT_BACKEND_URL = "http://127.0.0.1:8000"
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
SESSIONS_API_VERSION = "v1beta1"


class Environment(str, Enum):
    """Where the process runs. Informational only."""
    LOCAL = "local"
    CLOUD = "cloud"


class DeploymentType(str, Enum):
    """Which backend is called and whether it needs a bearer token."""
    LOCAL = "local"
    AGENT_ENGINE = "agent_engine"
    CLOUD_RUN = "cloud_run"


class EndpointKind(str, Enum):
    """Operation kind used to build the outbound URL."""
    QUERY = "query"
    STREAM_QUERY = "streamQuery"
    SESSIONS = "sessions"
