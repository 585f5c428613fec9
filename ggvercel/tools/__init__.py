"""Tool declarations, validation and the shared operations behind them."""

from ggvercel.tools.builtin import build_registry
from ggvercel.tools.registry import ToolRegistry, ToolResult, ToolSpec

__all__ = ["ToolRegistry", "ToolResult", "ToolSpec", "build_registry"]
