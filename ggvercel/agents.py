"""Tool-using agents built on the gateway client.

``dashboard_tools`` are the calculator and simulated search offered to the
model by ``POST /dashboard/agent``. The agent classes bundle a model, a
system prompt and a tool set for longer-lived programmatic use.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from ggvercel.errors import DelegationError, ExpressionError
from ggvercel.models.catalog import DEFAULT_MODEL
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.llm.litellm_client import DEFAULT_MAX_STEPS, AgentTool
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.providers.sandbox.session import run_code
from ggvercel.tools.calculator import evaluate

logger = logging.getLogger(__name__)

CODE_AGENT_SYSTEM_PROMPT = "You are a helpful coding assistant."
CODE_AGENT_RUNTIME = "node22"
CODE_AGENT_TIMEOUT_MS = 10000


class ExpressionInput(BaseModel):
    expression: str


class QueryInput(BaseModel):
    query: str = Field(..., description="Search query")


class CodeInput(BaseModel):
    code: str = Field(..., description="JavaScript code to execute")


def calculate(expression: str) -> dict[str, Any]:
    try:
        return {"result": evaluate(expression)}
    except ExpressionError:
        return {"error": "Invalid expression"}


def simulated_search(query: str) -> dict[str, str]:
    return {"results": f"Simulated search: {query}"}


def dashboard_tools() -> list[AgentTool]:
    return [
        AgentTool("calculate", "Perform calculations", ExpressionInput, calculate),
        AgentTool("search", "Search for information", QueryInput, simulated_search),
    ]


class CodeAgent:
    def __init__(
        self,
        gateway: ModelGateway,
        provider: SandboxProvider,
        model: str = DEFAULT_MODEL,
        system_prompt: str | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> None:
        self._gateway = gateway
        self._provider = provider
        self._model = model
        self._system_prompt = system_prompt or CODE_AGENT_SYSTEM_PROMPT
        self._max_steps = max_steps

    async def _execute_code(self, code: str) -> dict[str, Any]:
        try:
            result = await run_code(
                self._provider, code, runtime=CODE_AGENT_RUNTIME, timeout_ms=CODE_AGENT_TIMEOUT_MS
            )
        except DelegationError as exc:
            logger.warning("executeCode failed: %s", exc)
            return {"error": str(exc), "success": False}
        return {"output": result.stdout or result.stderr, "success": not result.stderr}

    @staticmethod
    def _search_docs(query: str) -> dict[str, str]:
        return {"results": f"Documentation search for: {query} (simulated)"}

    def tools(self) -> list[AgentTool]:
        return [
            AgentTool(
                "executeCode", "Execute JavaScript code in a sandbox", CodeInput, self._execute_code
            ),
            AgentTool(
                "searchDocs", "Search documentation for information", QueryInput, self._search_docs
            ),
        ]

    async def execute(self, task: str) -> dict[str, Any]:
        generation = await self._gateway.generate(
            self._model,
            prompt=task,
            system=self._system_prompt,
            tools=self.tools(),
            max_steps=self._max_steps,
        )
        return {"text": generation.text, "steps": generation.steps}


class ResearchAgent:
    def __init__(self, gateway: ModelGateway, model: str = DEFAULT_MODEL, max_steps: int = 3) -> None:
        self._gateway = gateway
        self._model = model
        self._max_steps = max_steps

    @staticmethod
    def _web_search(query: str) -> dict[str, str]:
        return {"results": f"Simulated web search for: {query}"}

    async def research(self, topic: str) -> dict[str, Any]:
        generation = await self._gateway.generate(
            self._model,
            prompt=f"Research and summarize: {topic}",
            tools=[
                AgentTool(
                    "webSearch", "Search the web for information", QueryInput, self._web_search
                )
            ],
            max_steps=self._max_steps,
        )
        return {"summary": generation.text, "steps": generation.steps}


class WorkflowAgent:
    def __init__(self, gateway: ModelGateway, model: str = DEFAULT_MODEL) -> None:
        self._gateway = gateway
        self._model = model

    async def run_workflow(self, tasks: list[str]) -> list[dict[str, str]]:
        results = []
        for task in tasks:
            generation = await self._gateway.generate(self._model, prompt=task)
            results.append({"task": task, "result": generation.text})
        return results
