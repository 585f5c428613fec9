"""Application factory: mounts the tool protocol and the dashboard."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import random
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from mcp.server.lowlevel import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from ggvercel import __version__
from ggvercel.api.dashboard import create_dashboard_router, iso_timestamp
from ggvercel.api.schemas import FIELD_MESSAGES
from ggvercel.config import Settings
from ggvercel.errors import AuthError, DelegationError, ValidationError
from ggvercel.models.catalog import ModelCatalog
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.llm.litellm_client import LiteLLMClient
from ggvercel.providers.sandbox import create_provider
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.tools import build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "GGVercel MCP Server"
MCP_PATH = "/api/mcp"
DASHBOARD_PATH = "/dashboard"


class MCPEndpoint:
    """ASGI adapter handing tool-protocol requests to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self._session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._session_manager.handle_request(scope, receive, send)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not loc:
        return "Request body required"
    if loc[0] in FIELD_MESSAGES:
        return FIELD_MESSAGES[loc[0]]
    return f"Invalid input for '{'.'.join(loc)}': {first.get('msg', 'invalid value')}"


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(AuthError)
    async def auth_handler(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(DelegationError)
    async def delegation_handler(request: Request, exc: DelegationError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})


def create_app(
    settings: Settings | None = None,
    *,
    gateway: ModelGateway | None = None,
    sandbox_provider: SandboxProvider | None = None,
    catalog: ModelCatalog | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    gateway = gateway or LiteLLMClient(
        api_key=settings.gateway_credential, base_url=settings.gateway_url
    )
    sandbox_provider = sandbox_provider or create_provider(settings)
    catalog = catalog or ModelCatalog.from_yaml(settings.models_path)
    registry = build_registry(gateway, sandbox_provider, catalog, rng)

    server = Server("ggvercel", version=__version__)
    registry.bind(server)
    session_manager = StreamableHTTPSessionManager(app=server, stateless=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    app = FastAPI(title="ggvercel", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.sandbox_provider = sandbox_provider
    app.state.catalog = catalog
    app.state.registry = registry
    app.state.mcp_server = server

    _install_error_handlers(app)
    app.add_route(MCP_PATH, MCPEndpoint(session_manager), methods=["GET", "POST", "DELETE"])
    app.include_router(create_dashboard_router(), prefix=DASHBOARD_PATH)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "timestamp": iso_timestamp()}

    @app.get("/")
    async def index() -> dict[str, Any]:
        return {
            "name": SERVER_NAME,
            "version": __version__,
            "endpoints": {
                "mcp": MCP_PATH,
                "health": "/health",
                "dashboard": DASHBOARD_PATH,
            },
            "tools": registry.names(),
        }

    return app
