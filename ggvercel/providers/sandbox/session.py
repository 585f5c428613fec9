"""Scoped sandbox sessions.

A session is provisioned, used for exactly one command and then released.
Release happens on every exit path, so a failing command or a provider error
never leaks remote compute.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator

from ggvercel.errors import SandboxError
from ggvercel.models.sandbox import ExecResult, SandboxSession
from ggvercel.providers.sandbox.base import SandboxProvider

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME = "node22"
DEFAULT_TIMEOUT_MS = 30000


def interpreter_for(runtime: str) -> tuple[str, str]:
    """Return ``(interpreter, filename)`` for a runtime tag such as ``node22``."""
    if runtime.startswith("node"):
        return "node", "code.mjs"
    return "python3", "code.py"


@asynccontextmanager
async def sandbox_session(
    provider: SandboxProvider,
    runtime: str = DEFAULT_RUNTIME,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> AsyncIterator[SandboxSession]:
    sandbox_id = await provider.create_sandbox(runtime, timeout_ms)
    try:
        yield SandboxSession(sandbox_id=sandbox_id, runtime=runtime, timeout_ms=timeout_ms)
    finally:
        try:
            await provider.stop_sandbox(sandbox_id)
        except SandboxError:
            logger.exception("Failed to release sandbox %s", sandbox_id)


async def run_code(
    provider: SandboxProvider,
    code: str,
    runtime: str = DEFAULT_RUNTIME,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> ExecResult:
    interpreter, filename = interpreter_for(runtime)
    async with sandbox_session(provider, runtime, timeout_ms) as session:
        await provider.write_file(session.sandbox_id, filename, code.encode("utf-8"))
        return await provider.exec(session.sandbox_id, [interpreter, filename])
