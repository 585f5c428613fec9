"""The five tools exposed over the tool protocol."""

from __future__ import annotations

import logging
import random

from ggvercel.errors import DelegationError
from ggvercel.models.catalog import ModelCatalog
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.tools import operations
from ggvercel.tools.registry import ToolRegistry, ToolResult
from ggvercel.tools.schemas import (
    AiGenerateInput,
    GetWeatherInput,
    ListModelsInput,
    RollDiceInput,
    SandboxExecuteInput,
)

logger = logging.getLogger(__name__)

SANDBOX_TOOL_RUNTIME = "node22"


def build_registry(
    gateway: ModelGateway,
    provider: SandboxProvider,
    catalog: ModelCatalog,
    rng: random.Random | None = None,
) -> ToolRegistry:
    registry = ToolRegistry()

    async def roll_dice(params: RollDiceInput) -> ToolResult:
        value = operations.roll_dice(params.sides, rng)
        return ToolResult(text=f"🎲 You rolled a {value}!")

    async def get_weather(params: GetWeatherInput) -> ToolResult:
        weather = operations.get_weather(params.location, rng)
        return ToolResult(
            text=f"Weather in {weather.location}: {weather.condition}, {weather.temperature}°C"
        )

    async def ai_generate(params: AiGenerateInput) -> ToolResult:
        try:
            generation = await operations.generate(gateway, params.model, prompt=params.prompt)
        except DelegationError as exc:
            logger.warning("ai_generate failed: %s", exc)
            return ToolResult(text=f"Error: {exc}", is_error=True)
        return ToolResult(text=generation.text)

    async def sandbox_execute(params: SandboxExecuteInput) -> ToolResult:
        try:
            result = await operations.execute_code(
                provider, params.code, SANDBOX_TOOL_RUNTIME, params.timeout
            )
        except DelegationError as exc:
            logger.warning("sandbox_execute failed: %s", exc)
            return ToolResult(text=f"Sandbox error: {exc}", is_error=True)
        return ToolResult(text=result.stdout or result.stderr or "No output")

    async def list_models(params: ListModelsInput) -> ToolResult:
        lines = [
            f"- {model.id} ({model.name} by {model.provider})"
            for model in operations.list_models(catalog, featured_only=True)
        ]
        return ToolResult(text="Available models:\n" + "\n".join(lines))

    registry.register(
        "roll_dice", "Roll a dice with a specified number of sides", RollDiceInput, roll_dice
    )
    registry.register(
        "get_weather", "Get simulated weather for a location", GetWeatherInput, get_weather
    )
    registry.register(
        "ai_generate",
        "Generate text using AI Gateway with specified model",
        AiGenerateInput,
        ai_generate,
    )
    registry.register(
        "sandbox_execute",
        "Execute JavaScript code safely in a sandbox",
        SandboxExecuteInput,
        sandbox_execute,
    )
    registry.register(
        "list_models", "List available AI models through the gateway", ListModelsInput, list_models
    )
    return registry
