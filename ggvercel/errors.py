"""Shared error types for the ggvercel server."""

from __future__ import annotations


class GGVercelError(Exception):
    """Base error for all ggvercel failures."""


class ConfigurationError(GGVercelError):
    """Process configuration or tool registration is invalid."""


class ValidationError(GGVercelError):
    """Tool or request input did not match its declared schema."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class AuthError(GGVercelError):
    """Bearer credential missing (401) or not accepted (403)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)


class DelegationError(GGVercelError):
    """An external service call failed."""


class GenerationError(DelegationError):
    """The model gateway failed or raised."""


class SandboxError(DelegationError):
    """A sandbox operation failed (provisioning, file write, run or stop)."""


class SandboxTimeoutError(SandboxError):
    """Sandbox execution exceeded the requested timeout."""

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Execution timed out after {timeout_ms}ms")


class ExpressionError(GGVercelError):
    """An arithmetic expression could not be evaluated."""
