"""Tests for the dashboard routes."""

from __future__ import annotations

import json

from ggvercel.errors import GenerationError, SandboxError
from ggvercel.models.catalog import MODEL_ID_PATTERN
from ggvercel.models.sandbox import ExecResult


def _events(body: str) -> list[str]:
    return [chunk for chunk in body.split("\n\n") if chunk]


class TestHelpAndStatus:
    def test_help(self, client) -> None:
        data = client.get("/dashboard/").json()
        assert data["name"] == "GGVercel AI Dashboard"
        assert data["version"] == "1.0.0"
        assert data["endpoints"]["POST /chat"] == "Chat with AI"
        assert "sandbox_execute" in data["tools"]

    def test_help_without_trailing_slash(self, client) -> None:
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == 200

    def test_status_is_static(self, client) -> None:
        data = client.get("/dashboard/status").json()
        assert data["status"] == "operational"
        assert data["services"] == {
            "aiGateway": "connected",
            "sandbox": "available",
            "mcpServer": "running",
        }
        assert data["environment"] == "test"
        assert data["timestamp"].endswith("Z")


class TestChat:
    def test_non_streaming(self, client, gateway, auth_headers) -> None:
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": False},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {
            "text": "Hello there!",
            "usage": {"inputTokens": 3, "outputTokens": 5, "totalTokens": 8},
        }
        assert gateway.calls[0]["model"] == "openai/gpt-5-nano"
        assert gateway.calls[0]["messages"] == [{"role": "user", "content": "hi"}]

    def test_streaming(self, client, gateway, auth_headers) -> None:
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "model": "xai/grok-4", "stream": True},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        events = _events(response.text)
        assert events[-1] == "data: [DONE]"
        fragments = [json.loads(event.removeprefix("data: "))["text"] for event in events[:-1]]
        assert fragments == ["Hello", " there", "!"]
        assert "".join(fragments) == gateway.text
        assert gateway.calls[0]["model"] == "xai/grok-4"

    def test_streaming_empty(self, client, gateway, auth_headers) -> None:
        gateway.fragments = []
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
            headers=auth_headers,
        )
        assert _events(response.text) == ["data: [DONE]"]

    def test_streaming_failure_before_first_fragment(self, client, gateway, auth_headers) -> None:
        gateway.error = GenerationError("model unavailable")
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
            headers=auth_headers,
        )
        assert response.status_code == 500
        assert response.json() == {"error": "model unavailable"}

    def test_streaming_failure_after_first_fragment(self, client, gateway, auth_headers) -> None:
        gateway.fragments = ["Hel"]
        gateway.stream_error = GenerationError("connection reset")
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
            headers=auth_headers,
        )
        assert response.status_code == 200
        events = _events(response.text)
        assert events[-1] == "data: [DONE]"
        assert [json.loads(event.removeprefix("data: ")) for event in events[:-1]] == [
            {"text": "Hel"},
            {"error": "connection reset"},
        ]

    def test_generation_failure_is_500(self, client, gateway, auth_headers) -> None:
        gateway.error = GenerationError("gateway exploded")
        response = client.post(
            "/dashboard/chat",
            json={"messages": [{"role": "user", "content": "hi"}]},
            headers=auth_headers,
        )
        assert response.status_code == 500
        assert response.json() == {"error": "gateway exploded"}

    def test_messages_required(self, client, gateway, auth_headers) -> None:
        for body in ({}, {"messages": "hi"}, {"messages": []}):
            response = client.post("/dashboard/chat", json=body, headers=auth_headers)
            assert response.status_code == 400
            assert response.json() == {"error": "Messages array required"}
        assert gateway.calls == []


class TestSandbox:
    def test_scenario_console_log(self, client, sandbox_provider, auth_headers) -> None:
        response = client.post(
            "/dashboard/sandbox", json={"code": "console.log(2+2)"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {"stdout": "4\n", "stderr": "", "exitCode": 0}
        assert sandbox_provider.events[0] == ("create", "node22", 30000)
        assert sandbox_provider.events[2] == ("exec", "sbx-1", ["node", "code.mjs"])
        assert sandbox_provider.stop_count == 1

    def test_python_runtime(self, client, sandbox_provider, auth_headers) -> None:
        client.post(
            "/dashboard/sandbox",
            json={"code": "print(1)", "runtime": "python3.13", "timeout": 5000},
            headers=auth_headers,
        )
        assert sandbox_provider.events[0] == ("create", "python3.13", 5000)
        assert sandbox_provider.events[2] == ("exec", "sbx-1", ["python3", "code.py"])

    def test_non_zero_exit(self, client, sandbox_provider, auth_headers) -> None:
        sandbox_provider.result = ExecResult(exit_code=1, stdout="", stderr="ReferenceError")
        response = client.post("/dashboard/sandbox", json={"code": "foo()"}, headers=auth_headers)
        assert response.json() == {"stdout": "", "stderr": "ReferenceError", "exitCode": 1}
        assert sandbox_provider.stop_count == 1

    def test_failure_is_500_and_released(self, client, sandbox_provider, auth_headers) -> None:
        sandbox_provider.exec_error = SandboxError("sandbox crashed")
        response = client.post("/dashboard/sandbox", json={"code": "1"}, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "sandbox crashed"}
        assert sandbox_provider.stop_count == 1

    def test_code_required(self, client, sandbox_provider, auth_headers) -> None:
        for body in ({}, {"code": ""}):
            response = client.post("/dashboard/sandbox", json=body, headers=auth_headers)
            assert response.status_code == 400
            assert response.json() == {"error": "Code required"}
        assert sandbox_provider.events == []

    def test_invalid_timeout(self, client, auth_headers) -> None:
        response = client.post(
            "/dashboard/sandbox", json={"code": "1", "timeout": "soon"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert "timeout" in response.json()["error"]


class TestAgent:
    def test_runs_with_tools(self, client, gateway, auth_headers) -> None:
        gateway.steps = [{"text": "", "toolCalls": [], "toolResults": [], "usage": {}}]
        response = client.post(
            "/dashboard/agent", json={"task": "What is 2+2?"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["text"] == "Hello there!"
        assert len(response.json()["steps"]) == 1
        call = gateway.calls[0]
        assert call["prompt"] == "What is 2+2?"
        assert [tool.name for tool in call["tools"]] == ["calculate", "search"]

    def test_task_required(self, client, auth_headers) -> None:
        response = client.post("/dashboard/agent", json={"task": ""}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Task required"}


class TestModels:
    def test_catalog(self, client) -> None:
        models = client.get("/dashboard/models").json()["models"]
        assert len(models) == 9
        for model in models:
            assert set(model) == {"id", "name", "provider", "type"}
            assert MODEL_ID_PATTERN.match(model["id"])
