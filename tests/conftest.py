"""Shared fakes for the gateway and the sandbox provider."""

from __future__ import annotations

import random
from typing import Any, AsyncIterator, Sequence

import pytest
from fastapi.testclient import TestClient

from ggvercel.api.main import create_app
from ggvercel.config import Settings
from ggvercel.models.catalog import ModelCatalog
from ggvercel.models.sandbox import ExecResult
from ggvercel.providers.llm.litellm_client import AgentTool, Generation

API_KEY = "gateway-secret"
OIDC_TOKEN = "oidc-secret"


class FakeGateway:
    def __init__(
        self,
        text: str = "Hello there!",
        fragments: Sequence[str] = ("Hello", " there", "!"),
        error: Exception | None = None,
        steps: list[dict[str, Any]] | None = None,
        stream_error: Exception | None = None,
    ) -> None:
        self.text = text
        self.fragments = list(fragments)
        self.error = error
        # Raised after every fragment has been yielded.
        self.stream_error = stream_error
        self.steps = steps or []
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        model: str,
        *,
        prompt: str | None = None,
        messages: Sequence[dict[str, Any]] | None = None,
        system: str | None = None,
        tools: Sequence[AgentTool] | None = None,
        max_steps: int = 5,
    ) -> Generation:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "messages": messages,
                "system": system,
                "tools": tools,
                "max_steps": max_steps,
            }
        )
        if self.error is not None:
            raise self.error
        return Generation(
            text=self.text,
            usage={"inputTokens": 3, "outputTokens": 5, "totalTokens": 8},
            steps=self.steps,
        )

    async def stream(self, model: str, messages: Sequence[dict[str, Any]]) -> AsyncIterator[str]:
        self.calls.append({"model": model, "messages": messages, "stream": True})
        if self.error is not None:
            raise self.error
        for fragment in self.fragments:
            yield fragment
        if self.stream_error is not None:
            raise self.stream_error


class RecordingSandboxProvider:
    """Records every provider call so tests can assert on the session lifecycle."""

    def __init__(
        self,
        result: ExecResult | None = None,
        exec_error: Exception | None = None,
        write_error: Exception | None = None,
        create_error: Exception | None = None,
        stop_error: Exception | None = None,
    ) -> None:
        self.result = result or ExecResult(exit_code=0, stdout="4\n", stderr="")
        self.exec_error = exec_error
        self.write_error = write_error
        self.create_error = create_error
        self.stop_error = stop_error
        self.events: list[tuple[Any, ...]] = []

    async def create_sandbox(self, runtime: str, timeout_ms: int) -> str:
        self.events.append(("create", runtime, timeout_ms))
        if self.create_error is not None:
            raise self.create_error
        return "sbx-1"

    async def write_file(self, sandbox_id: str, path: str, data: bytes) -> None:
        self.events.append(("write", sandbox_id, path, data))
        if self.write_error is not None:
            raise self.write_error

    async def exec(self, sandbox_id: str, command: Sequence[str]) -> ExecResult:
        self.events.append(("exec", sandbox_id, list(command)))
        if self.exec_error is not None:
            raise self.exec_error
        return self.result

    async def stop_sandbox(self, sandbox_id: str) -> None:
        self.events.append(("stop", sandbox_id))
        if self.stop_error is not None:
            raise self.stop_error

    @property
    def stop_count(self) -> int:
        return sum(1 for event in self.events if event[0] == "stop")


@pytest.fixture
def settings() -> Settings:
    return Settings(gateway_api_key=API_KEY, oidc_token=OIDC_TOKEN, environment="test")


@pytest.fixture
def catalog(settings: Settings) -> ModelCatalog:
    return ModelCatalog.from_yaml(settings.models_path)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def sandbox_provider() -> RecordingSandboxProvider:
    return RecordingSandboxProvider()


@pytest.fixture
def app(settings, gateway, sandbox_provider, catalog):
    return create_app(
        settings,
        gateway=gateway,
        sandbox_provider=sandbox_provider,
        catalog=catalog,
        rng=random.Random(7),
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_KEY}"}
