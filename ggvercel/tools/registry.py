"""Tool registry for the structured tool protocol.

A :class:`ToolSpec` binds a name, a description, a pydantic input model and
an async handler. The registry validates arguments before any handler runs
and wraps every outcome in the protocol's content envelope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import mcp.types as types
from mcp.server.lowlevel import Server
from pydantic import BaseModel

from ggvercel.errors import ConfigurationError, ValidationError
from ggvercel.tools.schemas import validate

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised inside the protocol server to flag a result as an error."""


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_content(self) -> list[types.TextContent]:
        """Content blocks for a success; errors raise so the server sets ``isError``."""
        if self.is_error:
            raise ToolCallError(self.text)
        return [types.TextContent(type="text", text=self.text)]


ToolHandler = Callable[[Any], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        input_model: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolSpec:
        if name in self._tools:
            raise ConfigurationError(f"Tool '{name}' is already registered")
        spec = ToolSpec(name=name, description=description, input_model=input_model, handler=handler)
        self._tools[name] = spec
        logger.debug("Registered tool: %s", name)
        return spec

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        spec = self._tools.get(name)
        if spec is None:
            return ToolResult(text=f"Unknown tool: {name}", is_error=True)
        try:
            validated = validate(spec.input_model, arguments)
        except ValidationError as exc:
            return ToolResult(text=str(exc), is_error=True)
        return await spec.handler(validated)

    def bind(self, server: Server) -> Server:
        """Install list/call handlers for every registered tool on ``server``."""

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema())
                for spec in self._tools.values()
            ]

        @server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            result = await self.call(name, arguments)
            return result.to_content()

        return server
