"""
Rendering of resolved values into substitution text.

Scalars render in their natural form (None as empty, True as "1", False as
empty); sequences, mappings and object handles render as a structured rich
dump. The result is HTML-escaped unless the tag carried the raw marker.
"""

import html
import math
from typing import Any
from rich.pretty import pretty_repr
from autoparse.models.value import ValueKind, value_kind


def number_format(value: int | float) -> str:
    """Decimal text for a number; integral floats drop the fraction."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        if abs(value) < 1e15:
            return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def value_render(value: Any) -> str:
    match value_kind(value):
        case ValueKind.NULL:
            return ""
        case ValueKind.BOOL:
            return "1" if value else ""
        case ValueKind.NUMBER:
            return number_format(value)
        case ValueKind.STRING:
            return value
        case ValueKind.SEQUENCE | ValueKind.MAPPING | ValueKind.OBJECT:
            return pretty_repr(value)
        case _:
            return str(value)


def value_format(value: Any, sanitize: bool = True) -> str:
    """Render a value for substitution.

    Args:
        value: Resolved, post-processed tag value
        sanitize: HTML-escape the rendering (`&`, `<`, `>`, quotes)

    Returns:
        Substitution text
    """
    text: str = value_render(value)
    return html.escape(text, quote=True) if sanitize else text
