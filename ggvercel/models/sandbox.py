"""Data models for sandbox interactions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecResult:
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int = 0


@dataclass(frozen=True)
class SandboxSession:
    sandbox_id: str
    runtime: str
    timeout_ms: int
