"""Provider package for sandbox and LLM gateway integrations."""

from ggvercel.providers.llm import AgentTool, Generation, LiteLLMClient, ModelGateway
from ggvercel.providers.sandbox import (
    DaytonaProvider,
    LocalProvider,
    SandboxProvider,
    create_provider,
)

__all__ = [
    "AgentTool",
    "DaytonaProvider",
    "Generation",
    "LiteLLMClient",
    "LocalProvider",
    "ModelGateway",
    "SandboxProvider",
    "create_provider",
]
