"""Interpret raw tool output as text, JSON or JSON Lines."""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

CODE_FENCE_PATTERN = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?```$", re.DOTALL)


class ParsedOutput(BaseModel):
    """Display view of a finished tool output."""
    type: str = Field(..., description="empty | text | json-object | json-array | jsonl")
    content: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    items: Optional[List[Any]] = None


def unwrap_code_fence(raw: str) -> str:
    """Strip a surrounding ``` fence (models often wrap JSON in one)."""
    text = raw.strip()
    match = CODE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text


def parse_json_lines(raw: str) -> Optional[List[Dict[str, Any]]]:
    """Every non-blank line must be a JSON object, otherwise None."""
    lines = [line.strip() for line in unwrap_code_fence(raw).splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return None

    items = []
    for line in lines:
        try:
            parsed = json.loads(line)
        except ValueError:
            return None
        if not isinstance(parsed, dict):
            return None
        items.append(parsed)
    return items


def parse_output(raw: str) -> ParsedOutput:
    """
    Pick the richest view the output supports.

    JSON Lines wins over a single JSON document, which wins over plain text.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return ParsedOutput(type="empty")

    normalized = unwrap_code_fence(trimmed)

    items = parse_json_lines(normalized)
    if items:
        return ParsedOutput(type="jsonl", items=items)

    try:
        parsed = json.loads(normalized)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return ParsedOutput(type="json-array", items=parsed)
    if isinstance(parsed, dict):
        return ParsedOutput(type="json-object", data=parsed)

    return ParsedOutput(type="text", content=normalized)


def format_value(value: Any) -> str:
    """Render a JSON value for display."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ", ".join(value)
    return json.dumps(value, indent=2, ensure_ascii=False)
