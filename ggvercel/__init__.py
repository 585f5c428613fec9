"""GGVercel: dice, weather, AI generation and sandboxed code over MCP and HTTP."""

__version__ = "1.0.0"
