"""Tests for the streaming relay client."""

import asyncio
import json

import httpx
import pytest

from toolstream.client.relay import CANCELLED_MESSAGE, ToolRelayClient


def make_client(handler):
    transport = httpx.MockTransport(handler)
    return ToolRelayClient("http://toolstream.test", http_client=httpx.AsyncClient(
        transport=transport,
        base_url="http://toolstream.test",
    ))


def chunked(*chunks, hang=False):
    async def body():
        for chunk in chunks:
            yield chunk
        if hang:
            await asyncio.Event().wait()

    return body()


class TestToolRelayClient:

    @pytest.mark.asyncio
    async def test_completed_run(self):
        requests = []

        async def handler(request):
            requests.append(json.loads(request.content))
            return httpx.Response(200, content=chunked(b"Hello", b", world"))

        seen = []
        async with make_client(handler) as client:
            result = await client.run("title-generator", {"topic": "espresso"}, on_text=seen.append)

        assert result.ok
        assert result.output == "Hello, world"
        assert seen == ["Hello", ", world"]
        assert requests == [{"slug": "title-generator", "inputs": {"topic": "espresso"}}]

    @pytest.mark.asyncio
    async def test_multibyte_character_split_across_chunks(self):
        async def handler(request):
            return httpx.Response(200, content=chunked(b"caf", b"\xc3", b"\xa9!"))

        seen = []
        async with make_client(handler) as client:
            result = await client.run("ai-humanizer", {"text": "x"}, on_text=seen.append)

        assert result.output == "café!"
        assert "".join(seen) == "café!"
        assert "�" not in result.output

    @pytest.mark.asyncio
    async def test_error_body_prefers_user_message(self):
        async def handler(request):
            return httpx.Response(
                429,
                json={"error": "Rate limit reached", "userMessage": "⏳ Too many requests. Please wait a moment."},
            )

        async with make_client(handler) as client:
            result = await client.run("title-generator", {"topic": "x"})

        assert result.status == "error"
        assert result.status_code == 429
        assert result.error == "⏳ Too many requests. Please wait a moment."
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_plain_error_body(self):
        async def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        async with make_client(handler) as client:
            result = await client.run("title-generator", {"topic": "x"})

        assert result.error == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        async def handler(request):
            raise httpx.ConnectError("connection refused")

        async with make_client(handler) as client:
            result = await client.run("title-generator", {"topic": "x"})

        assert result.status == "error"
        assert result.error == "connection refused"

    @pytest.mark.asyncio
    async def test_cancel_keeps_partial_output(self):
        async def handler(request):
            return httpx.Response(200, content=chunked(b"first ", hang=True))

        cancel = asyncio.Event()

        def on_text(text):
            cancel.set()

        async with make_client(handler) as client:
            result = await asyncio.wait_for(
                client.run("title-generator", {"topic": "x"}, on_text=on_text, cancel=cancel),
                timeout=5,
            )

        assert result.status == "cancelled"
        assert result.output == "first "
        assert result.error == CANCELLED_MESSAGE

    def test_parsed_view(self):
        from toolstream.client.relay import RelayResult

        result = RelayResult(status="completed", output='{"title": "A"}\n{"title": "B"}')

        assert result.view().type == "jsonl"
