"""Shared data models for the ggvercel server."""

from ggvercel.models.catalog import DEFAULT_MODEL, ModelCatalog, ModelDescriptor
from ggvercel.models.sandbox import ExecResult, SandboxSession

__all__ = [
    "DEFAULT_MODEL",
    "ExecResult",
    "ModelCatalog",
    "ModelDescriptor",
    "SandboxSession",
]
