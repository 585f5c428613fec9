"""LiteLLM client wrapper for the AI gateway."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Sequence

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ggvercel.config import DEFAULT_GATEWAY_URL
from ggvercel.errors import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 5


@dataclass(frozen=True)
class AgentTool:
    """A function the model may call while generating."""

    name: str
    description: str
    input_model: type[BaseModel]
    function: Callable[..., Any | Awaitable[Any]]

    def to_openai_format(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(),
            },
        }

    async def invoke(self, arguments: dict[str, Any]) -> Any:
        try:
            validated = self.input_model.model_validate(arguments)
        except PydanticValidationError as exc:
            return {"error": f"Invalid arguments for {self.name}: {exc.errors()[0]['msg']}"}
        result = self.function(**validated.model_dump())
        if inspect.isawaitable(result):
            result = await result
        return result


@dataclass(frozen=True)
class Generation:
    text: str
    usage: dict[str, int] = field(default_factory=dict)
    steps: list[dict[str, Any]] = field(default_factory=list)


def _usage(response: Any) -> dict[str, int]:
    usage = getattr(response, "usage", None)
    if usage is None:
        return {"inputTokens": 0, "outputTokens": 0, "totalTokens": 0}
    prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
    completion_tokens = getattr(usage, "completion_tokens", 0) or 0
    total_tokens = getattr(usage, "total_tokens", 0) or prompt_tokens + completion_tokens
    return {
        "inputTokens": prompt_tokens,
        "outputTokens": completion_tokens,
        "totalTokens": total_tokens,
    }


def _add_usage(total: dict[str, int], usage: dict[str, int]) -> dict[str, int]:
    return {key: total.get(key, 0) + value for key, value in usage.items()}


def _serialize_output(name: str, output: Any) -> tuple[str, Any]:
    """Return the tool message content and the output recorded on the step."""
    try:
        return json.dumps(output, default=str), output
    except (TypeError, ValueError) as exc:
        logger.warning("Tool %s returned unserializable output: %s", name, exc)
        error = {"error": f"Tool '{name}' returned output that could not be serialized"}
        return json.dumps(error), error


class LiteLLMClient:
    """Routes ``provider/model`` ids through the gateway's OpenAI-compatible API."""

    def __init__(self, api_key: str | None = None, base_url: str = DEFAULT_GATEWAY_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url

    def _litellm(self) -> Any:
        litellm_spec = importlib.util.find_spec("litellm")
        if litellm_spec is None:
            raise GenerationError("litellm must be installed to request completions.")
        return importlib.import_module("litellm")

    async def _complete(self, model: str, messages: list[dict[str, Any]], **overrides: Any) -> Any:
        litellm = self._litellm()
        params: dict[str, Any] = {
            # The gateway speaks the OpenAI wire format and keys models by their
            # full ``provider/model`` id.
            "model": f"openai/{model}",
            "messages": messages,
            "api_base": self._base_url,
            "api_key": self._api_key,
        }
        params.update(overrides)
        try:
            return await litellm.acompletion(**params)
        except Exception as exc:
            logger.warning("Gateway call for %s failed: %s", model, exc)
            raise GenerationError(str(exc) or exc.__class__.__name__) from exc

    @staticmethod
    def _build_messages(
        prompt: str | None,
        messages: Sequence[dict[str, Any]] | None,
        system: str | None,
    ) -> list[dict[str, Any]]:
        if prompt is None and not messages:
            raise GenerationError("Either a prompt or messages are required.")
        built: list[dict[str, Any]] = []
        if system:
            built.append({"role": "system", "content": system})
        if messages:
            built.extend(dict(message) for message in messages)
        if prompt is not None:
            built.append({"role": "user", "content": prompt})
        return built

    async def generate(
        self,
        model: str,
        *,
        prompt: str | None = None,
        messages: Sequence[dict[str, Any]] | None = None,
        system: str | None = None,
        tools: Sequence[AgentTool] | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> Generation:
        conversation = self._build_messages(prompt, messages, system)
        if not tools:
            response = await self._complete(model, conversation)
            text = response.choices[0].message.content or ""
            return Generation(text=text, usage=_usage(response))

        by_name = {tool.name: tool for tool in tools}
        schemas = [tool.to_openai_format() for tool in tools]
        steps: list[dict[str, Any]] = []
        total_usage: dict[str, int] = {}
        text = ""
        for _ in range(max_steps):
            response = await self._complete(model, conversation, tools=schemas)
            message = response.choices[0].message
            tool_calls = getattr(message, "tool_calls", None) or []
            usage = _usage(response)
            total_usage = _add_usage(total_usage, usage)
            text = message.content or ""
            step: dict[str, Any] = {
                "text": text,
                "toolCalls": [],
                "toolResults": [],
                "usage": usage,
            }
            steps.append(step)
            if not tool_calls:
                break

            conversation.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments,
                            },
                        }
                        for call in tool_calls
                    ],
                }
            )
            for call in tool_calls:
                output = await self._run_tool(by_name, call)
                content, output = _serialize_output(call.function.name, output)
                step["toolCalls"].append(
                    {
                        "toolCallId": call.id,
                        "toolName": call.function.name,
                        "input": call.function.arguments,
                    }
                )
                step["toolResults"].append(
                    {"toolCallId": call.id, "toolName": call.function.name, "output": output}
                )
                conversation.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "name": call.function.name,
                        "content": content,
                    }
                )
        return Generation(text=text, usage=total_usage, steps=steps)

    @staticmethod
    async def _run_tool(by_name: dict[str, AgentTool], call: Any) -> Any:
        name = call.function.name
        tool = by_name.get(name)
        if tool is None:
            logger.error("Model requested unknown tool %s", name)
            return {"error": f"Tool '{name}' not found"}
        raw = call.function.arguments
        try:
            arguments = json.loads(raw) if isinstance(raw, str) else dict(raw or {})
        except json.JSONDecodeError:
            return {"error": f"Invalid arguments for {name}"}
        return await tool.invoke(arguments)

    async def stream(
        self, model: str, messages: Sequence[dict[str, Any]]
    ) -> AsyncIterator[str]:
        """Yield text fragments in the order the gateway produces them."""
        conversation = self._build_messages(None, messages, None)
        response = await self._complete(model, conversation, stream=True)
        try:
            async for chunk in response:
                if not chunk.choices:
                    continue
                fragment = chunk.choices[0].delta.content
                if fragment:
                    yield fragment
        except Exception as exc:
            logger.warning("Gateway stream for %s failed: %s", model, exc)
            raise GenerationError(str(exc) or exc.__class__.__name__) from exc
