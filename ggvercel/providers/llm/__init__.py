"""Language-model gateway client and interfaces."""

from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.llm.litellm_client import AgentTool, Generation, LiteLLMClient

__all__ = ["AgentTool", "Generation", "LiteLLMClient", "ModelGateway"]
