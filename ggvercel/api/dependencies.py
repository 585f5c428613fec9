"""Request-scoped accessors for the components held on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from ggvercel.config import Settings
from ggvercel.models.catalog import ModelCatalog
from ggvercel.providers.llm.base import ModelGateway
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.tools.registry import ToolRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> ModelGateway:
    return request.app.state.gateway


def get_sandbox_provider(request: Request) -> SandboxProvider:
    return request.app.state.sandbox_provider


def get_catalog(request: Request) -> ModelCatalog:
    return request.app.state.catalog


def get_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry
