"""Sandbox provider interface."""

from __future__ import annotations

from typing import Protocol, Sequence

from ggvercel.models.sandbox import ExecResult


class SandboxProvider(Protocol):
    async def create_sandbox(self, runtime: str, timeout_ms: int) -> str:
        ...

    async def write_file(self, sandbox_id: str, path: str, data: bytes) -> None:
        ...

    async def exec(self, sandbox_id: str, command: Sequence[str]) -> ExecResult:
        ...

    async def stop_sandbox(self, sandbox_id: str) -> None:
        ...
