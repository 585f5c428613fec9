"""The logical operations shared by the tool protocol and the HTTP dashboard.

Each operation is implemented once here; the entry points only translate
their own request format into these calls and shape the result.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Sequence

from ggvercel.models.catalog import ModelCatalog, ModelDescriptor
from ggvercel.models.sandbox import ExecResult
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.llm.litellm_client import AgentTool, Generation
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.providers.sandbox.session import run_code

WEATHER_CONDITIONS = ("sunny", "cloudy", "rainy", "stormy", "snowy")
MIN_TEMPERATURE = -5
MAX_TEMPERATURE = 34


@dataclass(frozen=True)
class Weather:
    location: str
    condition: str
    temperature: int


def roll_dice(sides: int, rng: random.Random | None = None) -> int:
    rng = rng or random.SystemRandom()
    return rng.randint(1, sides)


def get_weather(location: str, rng: random.Random | None = None) -> Weather:
    rng = rng or random.SystemRandom()
    return Weather(
        location=location,
        condition=rng.choice(WEATHER_CONDITIONS),
        temperature=rng.randint(MIN_TEMPERATURE, MAX_TEMPERATURE),
    )


async def generate(
    gateway: ModelGateway,
    model: str,
    *,
    prompt: str | None = None,
    messages: Sequence[dict[str, Any]] | None = None,
    tools: Sequence[AgentTool] | None = None,
) -> Generation:
    return await gateway.generate(model, prompt=prompt, messages=messages, tools=tools)


async def execute_code(
    provider: SandboxProvider, code: str, runtime: str, timeout_ms: int
) -> ExecResult:
    return await run_code(provider, code, runtime=runtime, timeout_ms=timeout_ms)


def list_models(catalog: ModelCatalog, featured_only: bool = False) -> tuple[ModelDescriptor, ...]:
    return catalog.featured() if featured_only else catalog.all()
