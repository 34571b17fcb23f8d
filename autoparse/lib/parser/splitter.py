"""
Depth-aware splitting of tag paths.

A tag path such as `user:greet(session:name, 'x:y'):upper` is split on `:`
only where the colon sits outside every parenthesized span, so call argument
lists survive intact as a single segment.
"""

import re
from typing import Final
from autoparse.models.dataModel import KeyAccessor, CallAccessor

CALL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([a-zA-Z0-9_]+)\((.*)\)$", re.S)


class TagSyntaxError(ValueError):
    """Raised when a tag path nests parentheses beyond the allowed depth."""


def path_split(text: str, delimiter: str = ":", max_depth: int | None = None) -> list[str]:
    """Split text on a delimiter, ignoring delimiters inside parentheses.

    Args:
        text: String to split
        delimiter: Single splitting character
        max_depth: Optional nesting cap

    Returns:
        Segments in order; an empty trailing segment is dropped

    Raises:
        TagSyntaxError: If nesting exceeds max_depth
    """
    result: list[str] = []
    buffer: list[str] = []
    depth: int = 0

    for char in text:
        if char == "(":
            depth += 1
            if max_depth is not None and depth > max_depth:
                raise TagSyntaxError(
                    f"Parenthesis nesting exceeds {max_depth} in: {text[:64]}"
                )
            buffer.append(char)
        elif char == ")":
            if depth > 0:
                depth -= 1
            buffer.append(char)
        elif char == delimiter and depth == 0:
            result.append("".join(buffer))
            buffer = []
        else:
            buffer.append(char)

    if buffer:
        result.append("".join(buffer))

    return result


def accessor_parse(segment: str) -> KeyAccessor | CallAccessor:
    """Classify a path segment as a call `name(args)` or a plain key."""
    match = CALL_PATTERN.match(segment)
    if match:
        return CallAccessor(name=match.group(1), raw_args=match.group(2).strip())
    return KeyAccessor(name=segment)
