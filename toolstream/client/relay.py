"""Client for consuming streamed tool runs."""

import asyncio
import codecs
import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import httpx

from toolstream.services.output_parser import ParsedOutput, parse_output

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate content."
CANCELLED_MESSAGE = "Generation cancelled."


@dataclass
class RelayResult:
    """Outcome of one streamed tool run as seen by the caller."""
    status: str  # "completed" | "error" | "cancelled"
    output: str = ""
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def view(self) -> ParsedOutput:
        return parse_output(self.output)


def _error_message(body: str) -> str:
    """Prefer the friendly userMessage of a JSON error body, else the raw text."""
    text = body.strip()
    if not text:
        return GENERIC_FAILURE_MESSAGE
    try:
        data = json.loads(text)
    except ValueError:
        return text
    if isinstance(data, dict):
        return data.get("userMessage") or data.get("error") or text
    return text


class ToolRelayClient:
    """
    Streams tool output from a toolstream server.

    Usage:
        async with ToolRelayClient("http://localhost:8000") as client:
            result = await client.run("title-generator", {"topic": "espresso"}, on_text=print)
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=10.0),
        )

    async def __aenter__(self) -> "ToolRelayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def run(
        self,
        slug: str,
        inputs: Dict[str, str],
        on_text: Optional[Callable[[str], None]] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> RelayResult:
        """
        Run a tool and collect its streamed output.

        Args:
            slug: Tool identifier
            inputs: Field name -> value
            on_text: Called with each decoded piece of text as it arrives
            cancel: Setting this event stops the run promptly

        Returns:
            RelayResult with status "completed", "error" or "cancelled"
        """
        cancel = cancel or asyncio.Event()
        chunks: List[str] = []
        consume = asyncio.ensure_future(self._consume(slug, inputs, chunks, on_text))
        cancelled = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait({consume, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            consume.cancel()
            raise
        finally:
            cancelled.cancel()

        if consume in done:
            return consume.result()

        consume.cancel()
        await asyncio.wait({consume})
        logger.info("Tool run cancelled by caller", extra={"slug": slug})
        return RelayResult(status="cancelled", output="".join(chunks), error=CANCELLED_MESSAGE)

    async def _consume(
        self,
        slug: str,
        inputs: Dict[str, str],
        chunks: List[str],
        on_text: Optional[Callable[[str], None]],
    ) -> RelayResult:
        # Multi-byte characters may straddle chunk boundaries; only the last decode flushes
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        def _emit(text: str) -> None:
            if not text:
                return
            chunks.append(text)
            if on_text is not None:
                on_text(text)

        try:
            async with self._client.stream(
                "POST",
                "/tools/run",
                json={"slug": slug, "inputs": inputs},
                headers={"Accept": "text/plain"},
            ) as response:
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    return RelayResult(
                        status="error",
                        error=_error_message(body),
                        status_code=response.status_code,
                    )

                async for chunk in response.aiter_bytes():
                    _emit(decoder.decode(chunk, final=False))
                _emit(decoder.decode(b"", final=True))
                return RelayResult(status="completed", output="".join(chunks), status_code=response.status_code)
        except httpx.HTTPError as e:
            logger.error(f"Tool run request failed: {e}", exc_info=True, extra={"slug": slug})
            return RelayResult(
                status="error",
                output="".join(chunks),
                error=str(e) or GENERIC_FAILURE_MESSAGE,
            )
