"""Sandbox provider implementations and interfaces."""

from ggvercel.config import Settings
from ggvercel.providers.sandbox.base import SandboxProvider
from ggvercel.providers.sandbox.daytona import DaytonaProvider
from ggvercel.providers.sandbox.local import LocalProvider
from ggvercel.providers.sandbox.session import run_code, sandbox_session


def create_provider(settings: Settings) -> SandboxProvider:
    if settings.sandbox_provider == "local":
        return LocalProvider()
    return DaytonaProvider()


__all__ = [
    "DaytonaProvider",
    "LocalProvider",
    "SandboxProvider",
    "create_provider",
    "run_code",
    "sandbox_session",
]
