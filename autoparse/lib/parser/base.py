r"""
Tag scanner for buffer substitution.

Scans rendered text for self-closing tags and replaces each one with the
substitution its resolver produces. Text that does not form a tag, including
malformed candidates, passes through unchanged.

Tag syntax:
    <path[::post-processor][~]/>

- path: identifier/path characters (letters, digits, `_`, `-`, `:`,
  parentheses, quotes, commas, whitespace)
- post-processor: optional `::name` suffix, e.g. `::json`
- `~`: optional raw marker that disables HTML escaping

Example:
    parser = TagParser(resolver=TagResolver(context))
    result = parser.parse("<p>Hello <session:user:name/></p>")
"""

import re
from typing import Protocol, runtime_checkable, Self
from autoparse.config.settings import appsettings
from autoparse.lib.context import RenderContext
from autoparse.lib.log import LOG
from autoparse.lib.parser.resolvers import TagResolver
from autoparse.models.dataModel import ParseResult, Tag


@runtime_checkable
class TokenResolver(Protocol):
    """Protocol defining the resolver interface for tag substitution.

    Resolvers return ParseResult objects whose text is substituted for the
    tag whether or not resolution succeeded.
    """

    def resolve(self: Self, tag: Tag) -> ParseResult:
        """Resolve a tag to its substitution.

        Args:
            tag: Parsed tag occurrence

        Returns:
            ParseResult containing:
                - text: Substitution text
                - error: Error message if resolution failed
                - success: Whether resolution succeeded
        """
        ...


def tag_pattern(max_length: int) -> re.Pattern[str]:
    """Compile the tag pattern with a bounded body length."""
    return re.compile(
        r"<([a-zA-Z0-9_\-:()'\",\s]{1,%d}?)(?:::([a-zA-Z\-]+))?(~?)/>" % max_length
    )


class TagParser:
    """Scan text for tags and substitute their resolutions.

    Attributes:
        resolver: Strategy for resolving tags
        pattern: Compiled tag pattern
    """

    def __init__(
        self: Self, resolver: TokenResolver, max_tag_length: int | None = None
    ) -> None:
        """Initialize parser with a resolver.

        Args:
            resolver: Strategy for resolving tags
            max_tag_length: Longest tag body to consider; defaults to settings

        Raises:
            ValueError: If max_tag_length is not positive
        """
        length: int = (
            max_tag_length if max_tag_length is not None else appsettings.max_tag_length
        )
        if length <= 0:
            raise ValueError("Maximum tag length must be positive")

        self.resolver: TokenResolver = resolver
        self.pattern: re.Pattern[str] = tag_pattern(length)

    def parse(self: Self, input_text: str) -> ParseResult:
        """Parse input text and substitute every tag.

        Args:
            input_text: Rendered text possibly containing tags

        Returns:
            ParseResult with the substituted text; success is False when any
            tag failed to resolve, with the last failure in error
        """
        if not input_text:
            return ParseResult(text="", error=None, success=True)

        errors: list[str] = []

        def _substitute(match: re.Match[str]) -> str:
            tag: Tag = Tag(
                path=match.group(1),
                post_processor=match.group(2),
                raw=match.group(3) == "~",
            )
            try:
                result: ParseResult = self.resolver.resolve(tag)
            except Exception as e:
                LOG(f"Error resolving tag {match.group(0)!r}: {e}")
                errors.append(str(e))
                return ""
            if not result.success and result.error:
                errors.append(result.error)
            return result.text

        text: str = self.pattern.sub(_substitute, input_text)
        return ParseResult(
            text=text, error=errors[-1] if errors else None, success=not errors
        )


def resolve_buffer(text: str, context: RenderContext) -> str:
    """Substitute every tag in text using the given context.

    This is the single entry point a host calls once per rendered output.
    It never raises for tag-level problems.
    """
    return TagParser(resolver=TagResolver(context)).parse(text).text
