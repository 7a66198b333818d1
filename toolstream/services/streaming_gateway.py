"""
Streaming gateway for AI tool runs.

One run moves through Validating -> Configuring -> Opening -> FirstChunkCheck
and then either fails with a classified JSON error (nothing committed yet) or
commits to a raw text stream (Relaying -> Closed). After commit, upstream
failures can only truncate the stream; they are reported in server logs.
"""

import asyncio
import logging
import time
from typing import Any, AsyncIterator, Callable, Dict, Optional, Protocol, Tuple

from pydantic import BaseModel

from toolstream.infra.config import Config
from toolstream.infra.error_handler import (
    ConfigurationError,
    GatewayError,
    GenerationCancelledError,
    InvalidRequestError,
    ToolNotFoundError,
    UpstreamError,
    classify_error,
)
from toolstream.infra.metrics import (
    tool_first_chunk_duration,
    tool_runs_total,
    tool_stream_bytes_total,
)
from toolstream.models.stream import ErrorPart, StreamPart, StreamSession, TextDelta
from toolstream.models.tool import ToolDefinition, ToolRunRequest
from toolstream.services.prompt_builder import compile_template
from toolstream.services.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


class UpstreamProvider(Protocol):
    def stream_text(
        self,
        *,
        system: str,
        prompt: str,
        model_id: str,
        on_error: Optional[Callable[[Any], None]] = None,
    ) -> AsyncIterator[StreamPart]:
        ...


class GatewaySettings(BaseModel):
    """Configuration the gateway needs, resolved once at process start."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_id: Optional[str] = None
    first_chunk_timeout: Optional[float] = None
    idle_timeout: Optional[float] = None

    @classmethod
    def from_config(cls, config: Config) -> "GatewaySettings":
        return cls(
            api_key=config.AI_GATEWAY_API_KEY,
            base_url=config.AI_GATEWAY_URL,
            model_id=config.AI_MODEL_ID,
            first_chunk_timeout=config.TOOL_FIRST_CHUNK_TIMEOUT,
            idle_timeout=config.TOOL_STREAM_IDLE_TIMEOUT,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and bool(self.model_id)

    def require(self) -> Tuple[str, str]:
        """Return (api_key, model_id) or raise ConfigurationError."""
        if not self.api_key:
            raise ConfigurationError("AI gateway API key is not configured.")
        if not self.model_id:
            raise ConfigurationError("AI model configuration is missing.")
        return self.api_key, self.model_id


ProviderFactory = Callable[[GatewaySettings], UpstreamProvider]


def _default_provider_factory(settings: GatewaySettings) -> UpstreamProvider:
    from toolstream.adapters.vendor_adapter_gateway import create_gateway_provider
    return create_gateway_provider(settings.api_key, settings.base_url)


class StreamTimeout(Exception):
    """No upstream unit arrived within the configured bound."""


async def read_or_abort(session: StreamSession, timeout: Optional[float] = None) -> Optional[StreamPart]:
    """
    Read one upstream unit, racing it against the session's abort signal.

    Returns:
        The unit, or None when the upstream is exhausted

    Raises:
        GenerationCancelledError: abort fired first
        StreamTimeout: timeout elapsed first
        Exception: whatever the read itself raised
    """
    if session.abort.is_set():
        raise GenerationCancelledError()

    read_task = asyncio.ensure_future(session.read())
    abort_task = asyncio.ensure_future(session.abort.wait())
    try:
        done, _ = await asyncio.wait(
            {read_task, abort_task},
            timeout=timeout,
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        abort_task.cancel()
        if not read_task.done():
            read_task.cancel()
            # Let the reader unwind its own cleanup before anyone closes it
            await asyncio.wait({read_task})

    if read_task in done:
        return read_task.result()
    if abort_task in done:
        raise GenerationCancelledError()
    raise StreamTimeout(f"Upstream stream timed out after {timeout} seconds")


class ToolStream:
    """
    A committed relay: the first unit passed the error check.

    Iterating yields UTF-8 bytes of each text delta, in upstream order. The
    relay ends on upstream completion, an error unit, a callback error, abort
    or idle timeout. The upstream reader is released on every exit.
    """

    def __init__(
        self,
        session: StreamSession,
        first: Optional[StreamPart],
        slug: str,
        idle_timeout: Optional[float] = None,
    ):
        self.session = session
        self.slug = slug
        self.outcome: Optional[str] = None
        self.bytes_sent = 0
        self._first = first
        self._idle_timeout = idle_timeout
        self._relay: Optional[AsyncIterator[bytes]] = None

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.iter_bytes()

    def iter_bytes(self) -> AsyncIterator[bytes]:
        if self._relay is None:
            self._relay = self._relay_bytes()
        return self._relay

    async def _relay_bytes(self) -> AsyncIterator[bytes]:
        session = self.session
        outcome = "completed"
        try:
            if isinstance(self._first, TextDelta) and self._first.text:
                yield self._encode(self._first.text)
            if self._first is None:
                return

            while True:
                if session.errors.filled:
                    outcome = "truncated"
                    self._log_truncation(session.errors.error)
                    break

                part = await read_or_abort(session, self._idle_timeout)
                if part is None:
                    break
                if session.abort.is_set():
                    outcome = "cancelled"
                    break
                if isinstance(part, ErrorPart):
                    session.errors.offer(part.error)
                    outcome = "truncated"
                    self._log_truncation(part.error)
                    break
                if part.text:
                    yield self._encode(part.text)
        except GenerationCancelledError:
            outcome = "cancelled"
            logger.info("Tool stream cancelled by client", extra={"slug": self.slug, "bytes_sent": self.bytes_sent})
        except StreamTimeout as e:
            outcome = "truncated"
            self._log_truncation(e)
        except (asyncio.CancelledError, GeneratorExit):
            outcome = "cancelled"
            raise
        except Exception as e:
            outcome = "truncated"
            self._log_truncation(e)
        finally:
            self.outcome = outcome
            await session.release()
            tool_runs_total.labels(tool=self.slug, outcome=outcome).inc()

    def _encode(self, text: str) -> bytes:
        data = text.encode("utf-8")
        self.bytes_sent += len(data)
        tool_stream_bytes_total.labels(tool=self.slug).inc(len(data))
        return data

    def _log_truncation(self, error: Any) -> None:
        classified = classify_error(error)
        logger.error(
            f"Tool stream failed after commit: {classified.error}",
            exc_info=error if isinstance(error, BaseException) else None,
            extra={
                "slug": self.slug,
                "category": classified.category.value,
                "bytes_sent": self.bytes_sent,
            },
        )

    async def aclose(self) -> None:
        """Stop the relay and release the upstream reader."""
        self.session.abort.set()
        if self._relay is not None:
            try:
                await self._relay.aclose()
            except RuntimeError:
                logger.debug("Relay still running during close", exc_info=True)
        await self.session.release()


class StreamingGateway:
    """Runs registered tools against the upstream provider."""

    def __init__(
        self,
        registry: ToolRegistry,
        settings: GatewaySettings,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        self.registry = registry
        self.settings = settings
        self._provider_factory = provider_factory or _default_provider_factory

    def validate(self, request: ToolRunRequest) -> Tuple[ToolDefinition, Dict[str, str]]:
        """
        Resolve the tool and the effective inputs, or raise a client error.

        Absent select fields fall back to their default option. Unknown input
        names are dropped.
        """
        if not request.slug or not request.slug.strip():
            raise InvalidRequestError("Missing tool identifier.")

        tool = self.registry.lookup(request.slug)
        if tool is None:
            raise ToolNotFoundError("Tool not found.")

        inputs = tool.default_inputs()
        for name in tool.input_fields:
            value = request.inputs.get(name)
            if value is not None and value.strip():
                inputs[name] = value

        for name, field in tool.input_fields.items():
            value = inputs.get(name, "")
            if field.required and not value.strip():
                raise InvalidRequestError(
                    f"{field.label} is required",
                    user_message=f"⚠️ {field.label} is required.",
                )
            if field.type == "select" and value and value not in field.allowed_values():
                raise InvalidRequestError(
                    f"Invalid value for {field.label}: {value!r}",
                    user_message=f"⚠️ Please choose a valid option for {field.label}.",
                )

        return tool, inputs

    async def open(self, request: ToolRunRequest, abort: Optional[asyncio.Event] = None) -> ToolStream:
        """
        Run the pre-commit stages and return a committed ToolStream.

        Raises:
            GatewayError: any failure before the first byte is committed
        """
        slug = request.slug or ""
        try:
            tool, inputs = self.validate(request)
            _, model_id = self.settings.require()
        except GatewayError as e:
            self._log_rejection(slug, e)
            raise

        prompt = compile_template(tool.user_prompt_template, inputs)
        session = StreamSession(abort=abort)
        started = time.time()

        try:
            provider = self._provider_factory(self.settings)
            session.attach(
                provider.stream_text(
                    system=tool.system_prompt,
                    prompt=prompt,
                    model_id=model_id,
                    on_error=session.on_error,
                )
            )
            first = await read_or_abort(session, self.settings.first_chunk_timeout)
        except GenerationCancelledError as e:
            await session.release()
            self._log_rejection(tool.slug, e)
            raise
        except StreamTimeout as e:
            await session.release()
            raise self._upstream_failure(tool.slug, TimeoutError(str(e)))
        except asyncio.CancelledError:
            await session.release()
            raise
        except Exception as e:
            await session.release()
            raise self._upstream_failure(tool.slug, e)

        tool_first_chunk_duration.labels(tool=tool.slug).observe(time.time() - started)

        if isinstance(first, ErrorPart):
            session.errors.offer(first.error)
        if session.errors.filled:
            await session.release()
            raise self._upstream_failure(tool.slug, session.errors.error)

        logger.info("Tool stream committed", extra={"slug": tool.slug, "model_id": model_id})
        return ToolStream(session, first, tool.slug, self.settings.idle_timeout)

    def _upstream_failure(self, slug: str, error: Any) -> UpstreamError:
        classified = classify_error(error)
        logger.error(
            f"AI tool execution failed before commit: {classified.error}",
            exc_info=error if isinstance(error, BaseException) else None,
            extra={
                "slug": slug,
                "category": classified.category.value,
                "status_code": classified.status_code,
            },
        )
        tool_runs_total.labels(tool=slug, outcome=classified.category.value).inc()
        return UpstreamError(classified, cause=error)

    def _log_rejection(self, slug: str, error: GatewayError) -> None:
        tool_label = slug if slug in self.registry else "unknown"
        logger.warning(
            f"Tool run rejected: {error.message}",
            extra={
                "slug": slug,
                "category": error.classified.category.value,
                "status_code": error.status_code,
            },
        )
        tool_runs_total.labels(tool=tool_label, outcome=error.classified.category.value).inc()
