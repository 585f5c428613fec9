"""Request bodies accepted by the dashboard routes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ggvercel.models.catalog import DEFAULT_MODEL
from ggvercel.providers.sandbox.session import DEFAULT_RUNTIME, DEFAULT_TIMEOUT_MS

# Error messages for missing or malformed top-level fields.
FIELD_MESSAGES = {
    "messages": "Messages array required",
    "code": "Code required",
    "task": "Task required",
}


class ChatMessage(BaseModel):
    role: str
    content: str | list[dict[str, Any]]


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(..., min_length=1)
    model: str = DEFAULT_MODEL
    stream: bool = False


class SandboxRequest(BaseModel):
    code: str = Field(..., min_length=1)
    runtime: str = DEFAULT_RUNTIME
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)


class AgentRequest(BaseModel):
    task: str = Field(..., min_length=1)
    model: str = DEFAULT_MODEL
