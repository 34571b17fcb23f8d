"""
Tag resolvers for autoparse.

Implements the resolution strategy behind every tag:
- SourceResolver: maps the leading path segment onto a collaborator store
- TagResolver: source lookup, path walk, post-processing and formatting

Resolution is fail-soft. A tag whose path cannot be followed, or whose
post-processor is unknown, substitutes to an empty string; the reason is
reported in the ParseResult and logged.
"""

from typing import Any, Self
from autoparse.config.settings import appsettings
from autoparse.lib.context import RenderContext
from autoparse.lib.log import LOG
from autoparse.lib.parser.arguments import ArgumentTokenizer
from autoparse.lib.parser.formatter import value_format
from autoparse.lib.parser.postprocess import (
    PostProcessorTable,
    ProcessContext,
    postprocessors_default,
)
from autoparse.lib.parser.splitter import TagSyntaxError, accessor_parse, path_split
from autoparse.lib.parser.walker import PathWalker
from autoparse.models.dataModel import KeyAccessor, ParseResult, Tag, ValueSource, WalkResult


class SourceResolver:
    """Resolve a source selector to the value it names."""

    def __init__(self: Self, context: RenderContext) -> None:
        self.context: RenderContext = context

    def resolve(self: Self, selector: str) -> Any:
        """Return the store or global a selector refers to.

        `session`, `post`, `get`, `cookie`, `server` and `registry` select
        their stores; any other selector is looked up among the named
        globals and yields None when absent.
        """
        stores = self.context.stores
        match ValueSource.from_selector(selector):
            case ValueSource.SESSION:
                return stores.session
            case ValueSource.FORM:
                return stores.form
            case ValueSource.QUERY:
                return stores.query
            case ValueSource.COOKIE:
                return stores.cookies
            case ValueSource.SERVER:
                return stores.server
            case ValueSource.REGISTRY:
                return self.context.registry.as_mapping()
            case ValueSource.GLOBAL:
                return self.context.globals.get(selector)


class TagResolver:
    """Resolve parsed tags against a render context.

    Attributes:
        context: Request-scoped stores
        sources: Source selector resolver
        walker: Accessor chain walker
        postprocessors: Named terminal transforms
        max_depth: Parenthesis nesting cap for tag paths
        json_indent: Indent for pretty JSON output
    """

    def __init__(
        self: Self,
        context: RenderContext,
        postprocessors: PostProcessorTable | None = None,
        max_depth: int | None = None,
        json_indent: int | None = None,
    ) -> None:
        self.context: RenderContext = context
        self.sources: SourceResolver = SourceResolver(context)
        self.walker: PathWalker = PathWalker(
            context.functions, ArgumentTokenizer(self.reference_resolve)
        )
        self.postprocessors: PostProcessorTable = (
            postprocessors if postprocessors is not None else postprocessors_default()
        )
        self.max_depth: int = max_depth if max_depth is not None else appsettings.max_depth
        self.json_indent: int = (
            json_indent if json_indent is not None else appsettings.json_indent
        )

    def reference_resolve(self: Self, selector: str, path: list[str]) -> Any:
        """Follow a variable reference used as a call argument.

        Args:
            selector: Source selector, e.g. "session"
            path: Key segments after the selector

        Returns:
            Referenced value, or None when any segment is missing
        """
        result: WalkResult = self.walker.walk(
            self.sources.resolve(selector), [KeyAccessor(name=key) for key in path]
        )
        return result.value if result.success else None

    def resolve(self: Self, tag: Tag) -> ParseResult:
        """Resolve a tag to its substitution text.

        Args:
            tag: Parsed tag occurrence

        Returns:
            ParseResult containing:
                - text: Substitution (empty on failure)
                - error: Failure reason, if any
                - success: Whether the path and post-processor resolved
        """
        try:
            parts: list[str] = path_split(tag.path, ":", self.max_depth)
        except TagSyntaxError as e:
            LOG(str(e))
            return ParseResult(text="", error=str(e), success=False)
        if not parts:
            return ParseResult(text="", error="Empty tag path", success=False)

        selector, segments = parts[0], parts[1:]
        walk: WalkResult = self.walker.walk(
            self.sources.resolve(selector), [accessor_parse(s) for s in segments]
        )
        if not walk.success:
            return ParseResult(text="", error=walk.error, success=False)

        if tag.post_processor is not None and tag.post_processor not in self.postprocessors:
            error: str = f"Unknown post-processor: {tag.post_processor}"
            LOG(error)
            return ParseResult(text="", error=error, success=False)

        value: Any = self.postprocessors.apply(
            tag.post_processor,
            walk.value,
            ProcessContext(
                source=ValueSource.from_selector(selector),
                parts=segments,
                stores=self.context.stores,
                json_indent=self.json_indent,
            ),
        )
        return ParseResult(text=value_format(value, tag.sanitize), error=None, success=True)
