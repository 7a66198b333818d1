"""AI gateway vendor adapter: streamed chat completions over the OpenAI-compatible API."""

import logging
from typing import Any, AsyncIterator, Callable, Optional

from openai import AsyncOpenAI

from toolstream.models.stream import ErrorPart, StreamPart, TextDelta

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Any], None]


class GatewayProvider:
    """
    Streams text from an OpenAI-compatible AI gateway.

    Every failure is reported twice: through the ``on_error`` callback and
    as an ``ErrorPart`` unit. Generation is attempted exactly once (``max_retries=0``).
    """

    def __init__(self, api_key: str, base_url: Optional[str] = None):
        if not api_key:
            raise ValueError("AI gateway API key not configured")
        self._api_key = api_key
        self._base_url = base_url
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of the OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url or None,
                max_retries=0,
            )
        return self._client

    def stream_text(
        self,
        *,
        system: str,
        prompt: str,
        model_id: str,
        on_error: Optional[ErrorCallback] = None,
    ) -> AsyncIterator[StreamPart]:
        """
        Open a token stream. Nothing is sent upstream until the first read.

        Args:
            system: System prompt
            prompt: Compiled user prompt
            model_id: Gateway model identifier, e.g. "openai/gpt-4o-mini"
            on_error: Out-of-band error observer

        Returns:
            Async iterator of TextDelta / ErrorPart units
        """
        return self._parts(system=system, prompt=prompt, model_id=model_id, on_error=on_error)

    async def _parts(
        self,
        *,
        system: str,
        prompt: str,
        model_id: str,
        on_error: Optional[ErrorCallback],
    ) -> AsyncIterator[StreamPart]:
        stream = None
        try:
            stream = await self.client.chat.completions.create(
                model=model_id,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield TextDelta(text=content)
        except Exception as e:
            logger.error(f"AI gateway stream failed: {e}", exc_info=True, extra={"model_id": model_id})
            if on_error is not None:
                on_error(e)
            yield ErrorPart(error=e)
        finally:
            if stream is not None:
                await stream.close()


def create_gateway_provider(api_key: str, base_url: Optional[str] = None) -> GatewayProvider:
    return GatewayProvider(api_key=api_key, base_url=base_url)
