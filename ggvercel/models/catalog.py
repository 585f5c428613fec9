"""Static catalog of models reachable through the gateway."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from ggvercel.errors import ConfigurationError

DEFAULT_MODEL = "openai/gpt-5-nano"

MODEL_ID_PATTERN = re.compile(r"^[a-z]+/[\w.-]+$")


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str
    provider: str
    type: str = "chat"
    featured: bool = False

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data.pop("featured")
        return data


class ModelCatalog:
    def __init__(self, models: list[ModelDescriptor]) -> None:
        if not models:
            raise ConfigurationError("Model catalog is empty.")
        for model in models:
            if not MODEL_ID_PATTERN.match(model.id):
                raise ConfigurationError(f"Invalid model id: {model.id}")
        self._models = tuple(models)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ModelCatalog":
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Model catalog not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        entries = data.get("models", [])
        if not isinstance(entries, list):
            raise ConfigurationError("Model catalog 'models' must be a list.")
        return cls([cls._parse_entry(entry) for entry in entries])

    @staticmethod
    def _parse_entry(entry: Any) -> ModelDescriptor:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Malformed model entry: {entry!r}")
        try:
            return ModelDescriptor(
                id=str(entry["id"]),
                name=str(entry["name"]),
                provider=str(entry["provider"]),
                type=str(entry.get("type", "chat")),
                featured=bool(entry.get("featured", False)),
            )
        except KeyError as exc:
            raise ConfigurationError(f"Model entry missing {exc.args[0]!r}: {entry!r}") from exc

    def all(self) -> tuple[ModelDescriptor, ...]:
        return self._models

    def featured(self) -> tuple[ModelDescriptor, ...]:
        return tuple(model for model in self._models if model.featured)
