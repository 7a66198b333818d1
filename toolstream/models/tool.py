"""Tool definition and request models."""

from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


class ToolInputOption(BaseModel):
    """One allowed value of a select field."""
    value: str
    label: str
    selected: bool = False


class ToolInputField(BaseModel):
    """Declaration of one named input a tool accepts."""
    type: Literal["input", "textarea", "select"] = Field(..., description="Form control kind")
    label: str = Field(..., description="Human label, used in validation messages")
    placeholder: Optional[str] = None
    required: bool = False
    rows: Optional[int] = Field(default=None, description="Suggested height for textarea fields")
    options: List[ToolInputOption] = Field(
        default_factory=list,
        description="Allowed values (select fields only)",
    )

    def default_value(self) -> str:
        """Pre-selected option for selects, empty string otherwise."""
        if self.type != "select" or not self.options:
            return ""
        for option in self.options:
            if option.selected:
                return option.value
        return self.options[0].value

    def allowed_values(self) -> List[str]:
        return [option.value for option in self.options]


class ToolDefinition(BaseModel):
    """A registered AI tool: prompts plus the inputs it needs."""
    slug: str = Field(..., description="URL-safe tool identifier")
    name: str
    description: str
    category: str
    system_prompt: str
    user_prompt_template: str = Field(..., description="Template with {name} placeholders")
    input_fields: Dict[str, ToolInputField] = Field(
        default_factory=dict,
        description="Field name -> declaration, in display order",
    )
    tips: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)

    def default_inputs(self) -> Dict[str, str]:
        return {name: field.default_value() for name, field in self.input_fields.items()}

    def required_fields(self) -> List[str]:
        return [name for name, field in self.input_fields.items() if field.required]


class ToolRunRequest(BaseModel):
    """Payload of a tool run."""
    slug: str = Field(default="", description="Tool identifier")
    inputs: Dict[str, str] = Field(default_factory=dict, description="Field name -> value")
