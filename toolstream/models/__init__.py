from .tool import ToolDefinition, ToolInputField, ToolInputOption, ToolRunRequest
from .stream import ErrorPart, ErrorSlot, StreamPart, StreamSession, TextDelta

__all__ = [
    "ToolDefinition",
    "ToolInputField",
    "ToolInputOption",
    "ToolRunRequest",
    "ErrorPart",
    "ErrorSlot",
    "StreamPart",
    "StreamSession",
    "TextDelta",
]
