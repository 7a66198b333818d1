"""API request/response models."""

from typing import Dict, List
from pydantic import BaseModel, Field

from toolstream.models.tool import ToolDefinition, ToolInputField


class ToolSummaryResponse(BaseModel):
    """Catalog entry for a tool."""
    slug: str = Field(..., json_schema_extra={"example": "title-generator"})
    name: str
    description: str
    category: str


class ToolListResponse(BaseModel):
    items: List[ToolSummaryResponse]
    count: int


class ToolDetailResponse(ToolSummaryResponse):
    """Public view of a tool. Prompts are never exposed."""
    input_fields: Dict[str, ToolInputField]
    default_inputs: Dict[str, str] = Field(..., description="Initial form values")
    tips: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)

    @classmethod
    def from_tool(cls, tool: ToolDefinition) -> "ToolDetailResponse":
        return cls(
            slug=tool.slug,
            name=tool.name,
            description=tool.description,
            category=tool.category,
            input_fields=tool.input_fields,
            default_inputs=tool.default_inputs(),
            tips=tool.tips,
            benefits=tool.benefits,
        )


class ErrorResponse(BaseModel):
    """Body of every pre-commit failure."""
    error: str = Field(..., description="Internal error detail")
    userMessage: str = Field(..., description="Friendly message safe to show end users")
