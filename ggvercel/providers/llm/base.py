"""Model gateway interface."""

from __future__ import annotations

from typing import Any, AsyncIterator, Protocol, Sequence

from ggvercel.providers.llm.litellm_client import AgentTool, Generation


class ModelGateway(Protocol):
    async def generate(
        self,
        model: str,
        *,
        prompt: str | None = None,
        messages: Sequence[dict[str, Any]] | None = None,
        system: str | None = None,
        tools: Sequence[AgentTool] | None = None,
        max_steps: int = 5,
    ) -> Generation:
        ...

    def stream(self, model: str, messages: Sequence[dict[str, Any]]) -> AsyncIterator[str]:
        ...
