"""Agent Schemas — request bodies forwarded to the agent backend.

Invariants:
    - Bodies are forwarded as-is; only the envelope shape is validated here
    - Extra keys are preserved (the backend owns its payload contract)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentRequest(BaseModel):
    """Query/stream body. Unknown keys pass through to the backend."""
    model_config = ConfigDict(extra="allow")

    input: dict[str, Any] = Field(default_factory=dict)
    class_method: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SessionCreate(BaseModel):
    """Session creation. Agent Engine expects camelCase `userId`."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1, max_length=256)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
