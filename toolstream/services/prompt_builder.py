"""Prompt template compilation."""

import re
from typing import Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def compile_template(template: str, values: Optional[Mapping[str, Optional[str]]] = None) -> str:
    """
    Substitute {name} placeholders in a prompt template.

    Placeholders without a value render as an empty string. Braces that do not
    form a {name} placeholder are left untouched. There is no escape syntax.

    Args:
        template: User-prompt template, e.g. "Write about {topic}"
        values: Placeholder name -> value

    Returns:
        The compiled prompt
    """
    values = values or {}

    def _substitute(match: "re.Match[str]") -> str:
        value = values.get(match.group(1))
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, template or "")
