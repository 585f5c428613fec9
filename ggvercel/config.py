"""Process configuration loaded once from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ggvercel.errors import ConfigurationError

DEFAULT_GATEWAY_URL = "https://ai-gateway.vercel.sh/v1"
DEFAULT_MODELS_PATH = Path(__file__).parent / "models" / "catalog.yaml"

SANDBOX_PROVIDERS = ("daytona", "local")


class Settings(BaseModel):
    """Explicit process-wide settings handed to the components that need them."""

    model_config = ConfigDict(frozen=True)

    gateway_api_key: str | None = None
    oidc_token: str | None = None
    gateway_url: str = DEFAULT_GATEWAY_URL
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    sandbox_provider: str = "daytona"
    log_level: str = "INFO"
    models_path: Path = Field(default=DEFAULT_MODELS_PATH)

    @property
    def gateway_credential(self) -> str | None:
        return self.gateway_api_key or self.oidc_token

    @property
    def accepted_tokens(self) -> tuple[str, ...]:
        return tuple(
            token for token in (self.gateway_api_key, self.oidc_token) if token
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT", "3000")
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ConfigurationError(f"PORT must be an integer, got {raw_port!r}") from exc
        if not 0 < port < 65536:
            raise ConfigurationError(f"PORT out of range: {port}")

        provider = env.get("SANDBOX_PROVIDER", "daytona").lower()
        if provider not in SANDBOX_PROVIDERS:
            raise ConfigurationError(
                f"SANDBOX_PROVIDER must be one of {', '.join(SANDBOX_PROVIDERS)}, got {provider!r}"
            )

        models_path = env.get("GGVERCEL_MODELS_PATH")
        return cls(
            gateway_api_key=env.get("AI_GATEWAY_API_KEY") or None,
            oidc_token=env.get("VERCEL_OIDC_TOKEN") or None,
            gateway_url=env.get("AI_GATEWAY_BASE_URL") or DEFAULT_GATEWAY_URL,
            environment=env.get("VERCEL_ENV") or "development",
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            sandbox_provider=provider,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            models_path=Path(models_path) if models_path else DEFAULT_MODELS_PATH,
        )
