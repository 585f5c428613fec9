"""Daytona sandbox provider backed by the Daytona SDK."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import math
import shlex
from typing import Any, Sequence

from ggvercel.errors import SandboxError
from ggvercel.models.sandbox import ExecResult
from ggvercel.providers.sandbox.base import SandboxProvider

logger = logging.getLogger(__name__)


def _language_for(runtime: str) -> str:
    return "typescript" if runtime.startswith("node") else "python"


def _seconds(timeout_ms: int) -> int:
    return max(1, math.ceil(timeout_ms / 1000))


class DaytonaProvider(SandboxProvider):
    def __init__(self, api_key: str | None = None, api_url: str | None = None) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._sdk: Any = None
        self._client: Any = None
        self._sandboxes: dict[str, tuple[Any, int]] = {}

    def _ensure_client(self) -> Any:
        if self._client is not None:
            return self._client
        daytona_spec = importlib.util.find_spec("daytona")
        if daytona_spec is None:
            raise SandboxError(
                "daytona must be installed to use the daytona sandbox provider "
                "(pip install 'ggvercel[daytona]')."
            )
        self._sdk = importlib.import_module("daytona")
        config = None
        if self._api_key or self._api_url:
            config = self._sdk.DaytonaConfig(api_key=self._api_key, api_url=self._api_url)
        self._client = self._sdk.AsyncDaytona(config)
        return self._client

    async def create_sandbox(self, runtime: str, timeout_ms: int) -> str:
        client = self._ensure_client()
        params = self._sdk.CreateSandboxFromSnapshotParams(
            language=_language_for(runtime),
            auto_stop_interval=max(1, math.ceil(timeout_ms / 60000)),
        )
        try:
            sandbox = await client.create(params)
        except Exception as exc:
            raise SandboxError(f"Failed to provision {runtime} sandbox: {exc}") from exc
        self._sandboxes[sandbox.id] = (sandbox, timeout_ms)
        logger.info("Provisioned daytona sandbox %s (%s)", sandbox.id, runtime)
        return sandbox.id

    async def write_file(self, sandbox_id: str, path: str, data: bytes) -> None:
        sandbox, _ = self._get_sandbox(sandbox_id)
        try:
            await sandbox.fs.upload_file(data, path)
        except Exception as exc:
            raise SandboxError(f"Failed to write {path}: {exc}") from exc

    async def exec(self, sandbox_id: str, command: Sequence[str]) -> ExecResult:
        sandbox, timeout_ms = self._get_sandbox(sandbox_id)
        try:
            response = await sandbox.process.exec(
                shlex.join(command), timeout=_seconds(timeout_ms)
            )
        except Exception as exc:
            raise SandboxError(f"Command failed: {exc}") from exc
        # Daytona reports stdout and stderr interleaved in a single stream.
        return ExecResult(exit_code=response.exit_code, stdout=response.result or "", stderr="")

    async def stop_sandbox(self, sandbox_id: str) -> None:
        sandbox, _ = self._sandboxes.pop(sandbox_id, (None, 0))
        if sandbox is None:
            raise SandboxError(f"Unknown sandbox id: {sandbox_id}")
        try:
            await self._ensure_client().delete(sandbox)
        except Exception as exc:
            raise SandboxError(f"Failed to release sandbox {sandbox_id}: {exc}") from exc

    def _get_sandbox(self, sandbox_id: str) -> tuple[Any, int]:
        if sandbox_id not in self._sandboxes:
            raise SandboxError(f"Unknown sandbox id: {sandbox_id}")
        return self._sandboxes[sandbox_id]
