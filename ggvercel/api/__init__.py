"""HTTP entry points: the dashboard API and the tool-protocol mount."""

from ggvercel.api.main import create_app

__all__ = ["create_app"]
