"""Raw (unwrapped) HTTP responses for tool runs."""

from typing import Optional

from fastapi.responses import JSONResponse, StreamingResponse
from starlette.types import Receive, Scope, Send

from toolstream.infra.error_handler import ClassifiedError
from toolstream.services.streaming_gateway import ToolStream

# Tells the web front end to pass the body through verbatim
RAW_RESPONSE_HEADER = "x-tss-raw-response"

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


def error_response(classified: ClassifiedError, request_id: Optional[str] = None) -> JSONResponse:
    """Pre-commit failure: {error, userMessage} with the classified status."""
    headers = {RAW_RESPONSE_HEADER: "true"}
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(
        content=classified.to_payload(),
        status_code=classified.status_code,
        headers=headers,
        media_type=JSON_MEDIA_TYPE,
    )


class ToolStreamResponse(StreamingResponse):
    """
    Streams a committed ToolStream as raw text.

    The upstream reader is released when the response finishes, whether the
    body completed, the client disconnected or the task was cancelled.
    """

    def __init__(self, tool_stream: ToolStream):
        super().__init__(
            tool_stream.iter_bytes(),
            status_code=200,
            media_type=TEXT_MEDIA_TYPE,
            headers={
                "Cache-Control": "no-store",
                RAW_RESPONSE_HEADER: "true",
            },
        )
        self.tool_stream = tool_stream

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.tool_stream.aclose()
