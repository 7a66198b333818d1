"""HTTP contract tests for the tools API."""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from conftest import FakeProvider, FakeProviderFactory, deltas, error_part
from toolstream.main import create_app
from toolstream.services.streaming_gateway import GatewaySettings
from toolstream.services.tool_registry import default_registry


@pytest.fixture
def build_client(registry, settings):
    def _build(provider=None, settings_override=None, registry_override=None):
        provider = provider or FakeProvider(deltas("Hello", ", ", "world"))
        factory = FakeProviderFactory(provider)
        app = create_app(
            settings=settings_override or settings,
            registry=registry_override or registry,
            provider_factory=factory,
        )
        return TestClient(app, raise_server_exceptions=False), provider, factory

    return _build


def assert_json_error(response, status_code):
    assert response.status_code == status_code
    assert response.headers["content-type"].startswith("application/json")
    assert response.headers["x-tss-raw-response"] == "true"
    body = response.json()
    assert set(body) == {"error", "userMessage"}
    assert body["userMessage"]
    return body


class TestRunTool:

    def test_success_streams_raw_text(self, build_client):
        client, provider, _ = build_client()

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": "espresso"}})

        assert response.status_code == 200
        assert response.text == "Hello, world"
        assert response.headers["content-type"].startswith("text/plain")
        assert "charset=utf-8" in response.headers["content-type"]
        assert response.headers["cache-control"] == "no-store"
        assert response.headers["x-tss-raw-response"] == "true"
        assert "x-request-id" in response.headers
        assert provider.reader.closed

    def test_unknown_tool_is_404(self, build_client):
        client, provider, factory = build_client(settings_override=GatewaySettings())

        response = client.post("/tools/run", json={"slug": "missing", "inputs": {}})

        body = assert_json_error(response, 404)
        assert body["error"] == "Tool not found."
        assert factory.calls == 0

    def test_missing_slug_is_400(self, build_client):
        client, _, _ = build_client()

        response = client.post("/tools/run", json={"inputs": {"topic": "x"}})

        body = assert_json_error(response, 400)
        assert body["error"] == "Missing tool identifier."

    def test_required_field_is_400_with_label(self, build_client):
        client, _, factory = build_client()

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": ""}})

        body = assert_json_error(response, 400)
        assert body["error"] == "What's your content about? is required"
        assert factory.calls == 0

    def test_malformed_body_is_400(self, build_client):
        client, _, factory = build_client()

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": ["not", "a", "mapping"]})

        assert_json_error(response, 400)
        assert factory.calls == 0

    def test_missing_configuration_is_500(self, build_client):
        client, _, factory = build_client(settings_override=GatewaySettings(model_id="m"))

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": "x"}})

        body = assert_json_error(response, 500)
        assert body["error"] == "AI gateway API key is not configured."
        assert body["userMessage"].startswith("⚙️")
        assert factory.calls == 0

    def test_first_chunk_error_returns_json(self, build_client):
        provider = FakeProvider([error_part(RuntimeError("This model's maximum context length is 8192 tokens"))])
        client, _, _ = build_client(provider)

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": "x"}})

        body = assert_json_error(response, 400)
        assert "maximum context length" in body["error"]
        assert body["userMessage"].startswith("📏")
        assert provider.reader.closed

    def test_mid_stream_error_truncates_body(self, build_client):
        parts = [*deltas("1", "2", "3", "4"), error_part(RuntimeError("upstream died")), *deltas("5", "6")]
        provider = FakeProvider(parts)
        client, _, _ = build_client(provider)

        response = client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": "x"}})

        assert response.status_code == 200
        assert response.text == "1234"
        assert "error" not in response.text
        assert provider.reader.closed


class TestToolCatalog:

    def test_list_tools(self):
        client = TestClient(create_app(settings=GatewaySettings()))

        response = client.get("/tools")

        assert response.status_code == 200
        body = response.json()
        slugs = [item["slug"] for item in body["items"]]
        assert body["count"] == len(default_registry)
        assert slugs == [
            "title-generator",
            "ai-humanizer",
            "social-post-generator",
            "youtube-script-generator",
            "youtube-thumbnail-generator",
        ]

    def test_tool_detail_hides_prompts(self):
        client = TestClient(create_app(settings=GatewaySettings()))

        response = client.get("/tools/title-generator")

        assert response.status_code == 200
        body = response.json()
        assert body["default_inputs"] == {"topic": "", "platform": "YouTube", "tone": "No specific tone"}
        assert body["input_fields"]["topic"]["required"] is True
        assert "system_prompt" not in body
        assert "user_prompt_template" not in body

    def test_unknown_tool_detail_is_404(self):
        client = TestClient(create_app(settings=GatewaySettings()))

        response = client.get("/tools/nope")

        assert_json_error(response, 404)


class TestHealth:

    def test_ready_when_configured(self, build_client):
        client, _, _ = build_client()

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_without_configuration(self, build_client):
        client, _, _ = build_client(settings_override=GatewaySettings())

        response = client.get("/health/ready")

        assert response.status_code == 503

    def test_metrics_exposes_tool_runs(self, build_client):
        client, _, _ = build_client()
        client.post("/tools/run", json={"slug": "headline-writer", "inputs": {"topic": "x"}})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "tool_runs_total" in response.text


def run_scope(body: bytes):
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "scheme": "http",
        "path": "/tools/run",
        "raw_path": b"/tools/run",
        "root_path": "",
        "query_string": b"",
        "headers": [
            (b"host", b"testserver"),
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }


def tool_runs(outcome: str) -> float:
    value = REGISTRY.get_sample_value("tool_runs_total", {"tool": "headline-writer", "outcome": outcome})
    return value or 0.0


class TestClientDisconnect:
    """Drives the ASGI app directly so the client can go away at a chosen moment."""

    @pytest.mark.asyncio
    async def test_disconnect_before_first_chunk(self, registry, settings):
        provider = FakeProvider([], hang_at_end=True)
        app = create_app(settings=settings, registry=registry, provider_factory=FakeProviderFactory(provider))
        body = json.dumps({"slug": "headline-writer", "inputs": {"topic": "x"}}).encode()
        pending = [{"type": "http.request", "body": body, "more_body": False}]
        sent = []

        async def receive():
            if pending:
                return pending.pop(0)
            await asyncio.sleep(0.05)
            return {"type": "http.disconnect"}

        async def send(message):
            sent.append(message)

        cancelled_before = tool_runs("cancelled")

        await asyncio.wait_for(app(run_scope(body), receive, send), timeout=5)

        assert provider.reader.closed
        assert tool_runs("cancelled") == cancelled_before + 1
        statuses = [message["status"] for message in sent if message["type"] == "http.response.start"]
        assert statuses in ([], [499])

    @pytest.mark.asyncio
    async def test_disconnect_during_relay(self, registry, settings):
        provider = FakeProvider(deltas("one "), hang_at_end=True)
        app = create_app(settings=settings, registry=registry, provider_factory=FakeProviderFactory(provider))
        body = json.dumps({"slug": "headline-writer", "inputs": {"topic": "x"}}).encode()
        pending = [{"type": "http.request", "body": body, "more_body": False}]
        first_chunk_sent = asyncio.Event()
        sent = []

        async def receive():
            if pending:
                return pending.pop(0)
            await first_chunk_sent.wait()
            return {"type": "http.disconnect"}

        async def send(message):
            sent.append(message)
            if message["type"] == "http.response.body" and message.get("body"):
                first_chunk_sent.set()

        cancelled_before = tool_runs("cancelled")

        await asyncio.wait_for(app(run_scope(body), receive, send), timeout=5)

        chunks = [message.get("body", b"") for message in sent if message["type"] == "http.response.body"]
        assert b"".join(chunks) == b"one "
        assert provider.reader.closed
        assert tool_runs("cancelled") == cancelled_before + 1
