"""Pytest configuration and fixtures."""

import asyncio
import os
from typing import Any, List, Optional

import pytest
from dotenv import load_dotenv

# Load test environment variables
load_dotenv()

# Set test environment
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")

from toolstream.models.stream import ErrorPart, TextDelta
from toolstream.models.tool import ToolDefinition, ToolInputField, ToolInputOption
from toolstream.services.streaming_gateway import GatewaySettings, StreamingGateway
from toolstream.services.tool_registry import ToolRegistry


class FakeReader:
    """Scripted upstream stream. Exceptions in the script are raised when read."""

    def __init__(self, parts: List[Any], hang_at_end: bool = False):
        self.parts = list(parts)
        self.hang_at_end = hang_at_end
        self.index = 0
        self.reads = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.closed:
            raise StopAsyncIteration
        self.reads += 1
        if self.index >= len(self.parts):
            if self.hang_at_end:
                await asyncio.Event().wait()
            raise StopAsyncIteration
        part = self.parts[self.index]
        self.index += 1
        if isinstance(part, BaseException):
            raise part
        return part

    async def aclose(self):
        self.closed = True


class FakeProvider:
    """Upstream provider double that records every stream it opens."""

    def __init__(
        self,
        parts: Optional[List[Any]] = None,
        hang_at_end: bool = False,
        callback_error: Any = None,
    ):
        self.parts = parts or []
        self.hang_at_end = hang_at_end
        self.callback_error = callback_error
        self.calls = []
        self.readers: List[FakeReader] = []

    def stream_text(self, *, system, prompt, model_id, on_error=None):
        self.calls.append({"system": system, "prompt": prompt, "model_id": model_id})
        if self.callback_error is not None and on_error is not None:
            on_error(self.callback_error)
        reader = FakeReader(self.parts, hang_at_end=self.hang_at_end)
        self.readers.append(reader)
        return reader

    @property
    def reader(self) -> FakeReader:
        return self.readers[-1]


class FakeProviderFactory:
    def __init__(self, provider: FakeProvider):
        self.provider = provider
        self.calls = 0

    def __call__(self, settings: GatewaySettings) -> FakeProvider:
        self.calls += 1
        return self.provider


def deltas(*texts: str) -> List[TextDelta]:
    return [TextDelta(text=text) for text in texts]


def error_part(error: Any) -> ErrorPart:
    return ErrorPart(error=error)


@pytest.fixture
def test_tool():
    return ToolDefinition(
        slug="headline-writer",
        name="Headline Writer",
        description="Writes headlines",
        category="Content Creation",
        system_prompt="You write headlines.",
        user_prompt_template="Write headlines about {topic}. Tone: {tone}. Audience: {audience}",
        input_fields={
            "topic": ToolInputField(type="textarea", label="What's your content about?", required=True),
            "tone": ToolInputField(
                type="select",
                label="Tone",
                options=[
                    ToolInputOption(value="Neutral", label="Neutral"),
                    ToolInputOption(value="Funny", label="Funny", selected=True),
                ],
            ),
            "audience": ToolInputField(type="input", label="Audience"),
        },
    )


@pytest.fixture
def registry(test_tool):
    return ToolRegistry([test_tool])


@pytest.fixture
def settings():
    return GatewaySettings(api_key="test-key", base_url="http://gateway.test/v1", model_id="test/model")


@pytest.fixture
def make_gateway(registry, settings):
    """Build a gateway around a FakeProvider; returns (gateway, provider, factory)."""

    def _make(provider: Optional[FakeProvider] = None, settings_override: Optional[GatewaySettings] = None):
        provider = provider or FakeProvider()
        factory = FakeProviderFactory(provider)
        gateway = StreamingGateway(registry, settings_override or settings, provider_factory=factory)
        return gateway, provider, factory

    return _make
