"""
Terminal post-processors applied to a resolved tag value.

A tag may end in `::<name>` to transform its value before formatting,
e.g. `<user::json/>` or `<cart:items::count/>`. Processors are registered
by name in a PostProcessorTable; unknown names fail soft to an empty string.

Built-in processors:
- json, and the pretty variants pjson/jsonp/prettyjson/json-p/pretty-json
- length, count, upper, lower
- unset (removes a session key)
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Final, Self
from autoparse.lib.context import RequestStores
from autoparse.lib.log import LOG
from autoparse.models.dataModel import ValueSource
from autoparse.models.value import ObjectHandle, ValueKind, value_kind

PRETTY_JSON_NAMES: Final[tuple[str, ...]] = (
    "pjson",
    "jsonp",
    "prettyjson",
    "json-p",
    "pretty-json",
)


@dataclass
class ProcessContext:
    """What a post-processor may know besides the value.

    Attributes:
        source: Store the tag read from
        parts: Path segments after the source selector
        stores: Request stores, for processors with side effects
        json_indent: Indent for pretty JSON output
    """

    source: ValueSource
    parts: list[str]
    stores: RequestStores
    json_indent: int = 4


PostProcessor = Callable[[Any, ProcessContext], Any]


def _json_default(value: Any) -> Any:
    if isinstance(value, ObjectHandle):
        return value.export()
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_encode(value: Any, indent: int | None = None) -> str:
    """Encode a value as JSON, leaving non-ASCII text unescaped.

    NaN and infinite floats have no JSON form and count as a failure.

    Returns:
        JSON text, or an empty string when the value cannot be encoded
    """
    try:
        if indent is None:
            return json.dumps(
                value,
                ensure_ascii=False,
                separators=(",", ":"),
                default=_json_default,
                allow_nan=False,
            )
        return json.dumps(
            value,
            ensure_ascii=False,
            indent=indent,
            default=_json_default,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        LOG(f"JSON encoding failed: {e}")
        return ""


def json_compact(value: Any, context: ProcessContext) -> Any:
    return json_encode(value)


def json_pretty(value: Any, context: ProcessContext) -> Any:
    return json_encode(value, indent=context.json_indent)


def string_length(value: Any, context: ProcessContext) -> Any:
    return len(value) if value_kind(value) is ValueKind.STRING else ""


def element_count(value: Any, context: ProcessContext) -> Any:
    match value_kind(value):
        case ValueKind.SEQUENCE | ValueKind.MAPPING:
            return len(value)
        case ValueKind.OBJECT if value.countable():
            return value.count()
        case _:
            return ""


def string_upper(value: Any, context: ProcessContext) -> Any:
    return value.upper() if value_kind(value) is ValueKind.STRING else ""


def string_lower(value: Any, context: ProcessContext) -> Any:
    return value.lower() if value_kind(value) is ValueKind.STRING else ""


def session_unset(value: Any, context: ProcessContext) -> Any:
    """Remove `session:<key>` from the session store.

    Only a session tag with exactly one segment after the source is
    honored; the result is always an empty string.
    """
    if context.source is ValueSource.SESSION and len(context.parts) == 1:
        context.stores.session_remove(context.parts[0])
    return ""


class PostProcessorTable:
    """Name to post-processor registry."""

    def __init__(self: Self) -> None:
        self._processors: dict[str, PostProcessor] = {}

    def register(self: Self, name: str, processor: PostProcessor) -> None:
        """Register a processor under a name.

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._processors:
            raise ValueError(f"Post-processor already registered: {name}")
        self._processors[name] = processor

    def apply(self: Self, name: str | None, value: Any, context: ProcessContext) -> Any:
        """Run the named processor over a value.

        Args:
            name: Processor name, or None to pass the value through
            value: Resolved tag value
            context: Source, path and stores of the tag

        Returns:
            The transformed value; an empty string for unknown names
        """
        if name is None:
            return value
        processor: PostProcessor | None = self._processors.get(name)
        if processor is None:
            LOG(f"Unknown post-processor: {name}")
            return ""
        return processor(value, context)

    def __contains__(self: Self, name: object) -> bool:
        return name in self._processors


def postprocessors_default() -> PostProcessorTable:
    """Table holding the built-in processors."""
    table: PostProcessorTable = PostProcessorTable()
    table.register("json", json_compact)
    for name in PRETTY_JSON_NAMES:
        table.register(name, json_pretty)
    table.register("length", string_length)
    table.register("count", element_count)
    table.register("upper", string_upper)
    table.register("lower", string_lower)
    table.register("unset", session_unset)
    return table
