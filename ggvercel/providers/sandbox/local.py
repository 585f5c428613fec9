"""Local sandbox provider implementation.

Runs submitted code in a throwaway directory on the host. There is no
isolation at all, so it is only meant for development.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from pathlib import Path
import shutil
import tempfile
import time
from typing import Sequence
from uuid import uuid4
import warnings

from ggvercel.errors import SandboxError, SandboxTimeoutError
from ggvercel.models.sandbox import ExecResult
from ggvercel.providers.sandbox.base import SandboxProvider

logger = logging.getLogger(__name__)

_WARNING_MSG = (
    "LocalProvider executes submitted code directly on the host with NO isolation. "
    "Use the daytona provider for anything reachable from the network."
)


@dataclass(frozen=True)
class _SandboxRecord:
    sandbox_id: str
    root: Path
    runtime: str
    timeout_ms: int


class LocalProvider(SandboxProvider):
    def __init__(self, base_dir: str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path(
            tempfile.mkdtemp(prefix="ggvercel-local-")
        )
        self._sandboxes: dict[str, _SandboxRecord] = {}
        warnings.warn(_WARNING_MSG, stacklevel=2)
        logger.warning(_WARNING_MSG)

    async def create_sandbox(self, runtime: str, timeout_ms: int) -> str:
        sandbox_id = f"{runtime}-{uuid4().hex[:8]}"
        root = self._base_dir / sandbox_id
        root.mkdir(parents=True, exist_ok=False)
        self._sandboxes[sandbox_id] = _SandboxRecord(
            sandbox_id=sandbox_id, root=root, runtime=runtime, timeout_ms=timeout_ms
        )
        return sandbox_id

    async def write_file(self, sandbox_id: str, path: str, data: bytes) -> None:
        target = self._resolve_path(sandbox_id, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def exec(self, sandbox_id: str, command: Sequence[str]) -> ExecResult:
        record = self._get_record(sandbox_id)
        logger.warning("LocalProvider: executing %s on host (UNSANDBOXED)", list(command))
        start = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=record.root,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SandboxError(str(exc)) from exc
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=record.timeout_ms / 1000
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise SandboxTimeoutError(record.timeout_ms)
        duration_ms = int((time.monotonic() - start) * 1000)
        return ExecResult(
            exit_code=process.returncode or 0,
            stdout=stdout.decode(errors="replace") if stdout else "",
            stderr=stderr.decode(errors="replace") if stderr else "",
            duration_ms=duration_ms,
        )

    async def stop_sandbox(self, sandbox_id: str) -> None:
        record = self._get_record(sandbox_id)
        shutil.rmtree(record.root, ignore_errors=True)
        self._sandboxes.pop(sandbox_id, None)

    def _get_record(self, sandbox_id: str) -> _SandboxRecord:
        if sandbox_id not in self._sandboxes:
            raise SandboxError(f"Unknown sandbox id: {sandbox_id}")
        return self._sandboxes[sandbox_id]

    def _resolve_path(self, sandbox_id: str, path: str) -> Path:
        root = self._get_record(sandbox_id).root.resolve()
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = root / candidate
        resolved = candidate.resolve()
        if root != resolved and root not in resolved.parents:
            raise SandboxError(f"Path escapes sandbox: {path}")
        return resolved
