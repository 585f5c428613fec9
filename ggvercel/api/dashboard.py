"""Dashboard routes: the HTTP JSON flavour of the tool operations."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ggvercel import __version__
from ggvercel.agents import dashboard_tools
from ggvercel.api.auth import require_bearer
from ggvercel.api.dependencies import (
    get_catalog,
    get_gateway,
    get_registry,
    get_sandbox_provider,
    get_settings,
)
from ggvercel.api.schemas import AgentRequest, ChatRequest, SandboxRequest
from ggvercel.config import Settings
from ggvercel.errors import DelegationError
from ggvercel.models.catalog import ModelCatalog
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.tools import operations
from ggvercel.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

DONE_EVENT = "data: [DONE]\n\n"


def iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sse_event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, separators=(',', ':'), ensure_ascii=False)}\n\n"


def create_dashboard_router() -> APIRouter:
    router = APIRouter()

    @router.get("", include_in_schema=False)
    @router.get("/")
    async def dashboard_help(registry: ToolRegistry = Depends(get_registry)) -> dict[str, Any]:
        return {
            "name": "GGVercel AI Dashboard",
            "version": __version__,
            "endpoints": {
                "GET /": "This help",
                "GET /status": "System status",
                "POST /chat": "Chat with AI",
                "POST /sandbox": "Execute code in sandbox",
                "POST /agent": "Run AI agent workflow",
                "GET /models": "List available models",
            },
            "tools": registry.names(),
        }

    @router.get("/status")
    async def status(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
        return {
            "status": "operational",
            "services": {
                "aiGateway": "connected",
                "sandbox": "available",
                "mcpServer": "running",
            },
            "timestamp": iso_timestamp(),
            "environment": settings.environment,
        }

    @router.post("/chat", dependencies=[Depends(require_bearer)])
    async def chat(body: ChatRequest, gateway: ModelGateway = Depends(get_gateway)) -> Any:
        messages = [message.model_dump() for message in body.messages]
        if not body.stream:
            generation = await operations.generate(gateway, body.model, messages=messages)
            return {"text": generation.text, "usage": generation.usage}

        fragments = gateway.stream(body.model, messages)
        # Pull the first fragment before committing to a 200 so that a gateway
        # that fails up front still gets a JSON error response.
        try:
            first: str | None = await anext(fragments)
        except StopAsyncIteration:
            first = None

        async def event_stream() -> AsyncIterator[str]:
            if first is None:
                yield DONE_EVENT
                return
            yield sse_event({"text": first})
            try:
                async for fragment in fragments:
                    yield sse_event({"text": fragment})
            except DelegationError as exc:
                logger.warning("Chat stream aborted: %s", exc)
                yield sse_event({"error": str(exc)})
            yield DONE_EVENT

        return StreamingResponse(
            event_stream(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @router.post("/sandbox", dependencies=[Depends(require_bearer)])
    async def sandbox(
        body: SandboxRequest,
        provider: SandboxProvider = Depends(get_sandbox_provider),
    ) -> dict[str, Any]:
        result = await operations.execute_code(provider, body.code, body.runtime, body.timeout)
        return {"stdout": result.stdout, "stderr": result.stderr, "exitCode": result.exit_code}

    @router.post("/agent", dependencies=[Depends(require_bearer)])
    async def agent(body: AgentRequest, gateway: ModelGateway = Depends(get_gateway)) -> dict[str, Any]:
        generation = await operations.generate(
            gateway, body.model, prompt=body.task, tools=dashboard_tools()
        )
        return {"text": generation.text, "steps": generation.steps}

    @router.get("/models")
    async def models(catalog: ModelCatalog = Depends(get_catalog)) -> dict[str, Any]:
        return {"models": [model.to_dict() for model in operations.list_models(catalog)]}

    return router
