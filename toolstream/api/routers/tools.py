"""AI tools API router."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from toolstream.api.models import ErrorResponse, ToolDetailResponse, ToolListResponse, ToolSummaryResponse
from toolstream.api.responses import ToolStreamResponse, error_response
from toolstream.infra.error_handler import ClassifiedError, ErrorCategory, GatewayError
from toolstream.models.tool import ToolRunRequest
from toolstream.services.streaming_gateway import StreamingGateway

logger = logging.getLogger(__name__)

router = APIRouter()


def get_gateway(request: Request) -> StreamingGateway:
    """Gateway built once per app (see main.create_app)."""
    return request.app.state.gateway


async def watch_disconnect(request: Request, abort: asyncio.Event) -> None:
    """
    Set abort once the client goes away.

    The request body is already consumed, so the next ASGI message is the
    disconnect. Cancelled once the stream commits.
    """
    try:
        while not abort.is_set():
            message = await request.receive()
            if message["type"] == "http.disconnect":
                logger.info("Client disconnected before commit")
                abort.set()
    except Exception:
        # The receive channel is gone; the relay's own disconnect handling takes over
        logger.debug("Disconnect watcher stopped", exc_info=True)


@router.get("/tools", tags=["Tools"], response_model=ToolListResponse)
async def list_tools(gateway: StreamingGateway = Depends(get_gateway)):
    """List every registered AI tool."""
    items = [
        ToolSummaryResponse(
            slug=tool.slug,
            name=tool.name,
            description=tool.description,
            category=tool.category,
        )
        for tool in gateway.registry.list_tools()
    ]
    return ToolListResponse(items=items, count=len(items))


@router.get(
    "/tools/{slug}",
    tags=["Tools"],
    response_model=ToolDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_tool(slug: str, request: Request, gateway: StreamingGateway = Depends(get_gateway)):
    """Get the public definition of one tool: its input fields, defaults, tips and benefits."""
    tool = gateway.registry.lookup(slug)
    if tool is None:
        classified = ClassifiedError.for_category(ErrorCategory.NOT_FOUND, "Tool not found.")
        return error_response(classified, getattr(request.state, "request_id", None))
    return ToolDetailResponse.from_tool(tool)


@router.post(
    "/tools/run",
    tags=["Tools"],
    response_class=Response,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Raw generated text, streamed"},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def run_tool(
    payload: ToolRunRequest,
    request: Request,
    gateway: StreamingGateway = Depends(get_gateway),
):
    """
    Run an AI tool and stream its output.

    The body is the raw concatenated text as it is generated. Failures detected
    before the first byte return `{"error", "userMessage"}` with a matching
    status. Failures after that end the stream early.

    **Example Request:**
    ```json
    {"slug": "title-generator", "inputs": {"topic": "home espresso", "platform": "YouTube"}}
    ```
    """
    request_id = getattr(request.state, "request_id", None)
    abort = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, abort))
    try:
        tool_stream = await gateway.open(payload, abort=abort)
    except GatewayError as e:
        return error_response(e.classified, request_id)
    finally:
        watcher.cancel()
        await asyncio.gather(watcher, return_exceptions=True)

    logger.debug("Streaming tool output", extra={"slug": payload.slug, "request_id": request_id})
    return ToolStreamResponse(tool_stream)
