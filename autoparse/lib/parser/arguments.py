r"""
Argument tokenizer for call accessors.

Turns the raw text between a call's parentheses into a list of values.

The tokenizer handles:
- Top-level comma splitting that ignores commas inside quoted strings
- Quoted string literals with backslash escapes
- Variable references such as `session:user:name`
- Numeric, boolean and null literals

Anything it cannot classify becomes None; tokenizing never fails.

Example:
    tokenizer = ArgumentTokenizer(reference_resolve=resolver.reference_resolve)
    tokenizer.tokenize("'a,b', 2, true")  # ["a,b", 2, True]
"""

import re
from typing import Any, Callable, Final, Self
from autoparse.lib.log import LOG

QUOTES: Final[str] = "'\""
REFERENCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([a-z]+):([a-zA-Z0-9:_-]+)$")
INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[+-]?\d+$")
NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$"
)
ESCAPE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\\(.?)", re.S)

ReferenceResolver = Callable[[str, list[str]], Any]


def args_split(raw: str, delimiter: str = ",") -> list[str]:
    """Split an argument list on delimiters outside quoted strings.

    Single and double quotes are tracked independently, so `'` inside a
    `"`-quoted string does not close it. A backslash inside a string
    protects the next character.

    Args:
        raw: Text between a call's parentheses

    Returns:
        Untrimmed argument tokens; empty input yields no tokens
    """
    if not raw.strip():
        return []

    tokens: list[str] = []
    buffer: list[str] = []
    quote: str | None = None
    escaped: bool = False

    for char in raw:
        if escaped:
            escaped = False
        elif quote is not None:
            if char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == delimiter:
            tokens.append("".join(buffer))
            buffer = []
            continue
        buffer.append(char)

    tokens.append("".join(buffer))
    return tokens


def string_unescape(text: str) -> str:
    """Drop escaping backslashes: `\\'` becomes `'`, `\\\\` becomes `\\`."""
    return ESCAPE_PATTERN.sub(lambda m: m.group(1), text)


def number_parse(token: str) -> int | float | None:
    if INTEGER_PATTERN.match(token):
        return int(token)
    if NUMBER_PATTERN.match(token):
        return float(token)
    return None


class ArgumentTokenizer:
    """Classify call arguments into values.

    Attributes:
        reference_resolve: Callback resolving `source` and path segments to a
            value, returning None when the reference cannot be followed
    """

    def __init__(self: Self, reference_resolve: ReferenceResolver) -> None:
        self.reference_resolve: ReferenceResolver = reference_resolve

    def tokenize(self: Self, raw: str) -> list[Any]:
        """Parse a raw argument list into values.

        Args:
            raw: Text between a call's parentheses

        Returns:
            One value per top-level argument
        """
        return [self.argument_classify(token.strip()) for token in args_split(raw)]

    def argument_classify(self: Self, token: str) -> Any:
        """Turn one trimmed token into a value.

        Priority: quoted string, variable reference, number, boolean,
        null; anything else is None.
        """
        # a lone quote opens and closes itself: the empty string
        if token and token[0] in QUOTES and token[-1] == token[0]:
            return string_unescape(token[1:-1])

        reference = REFERENCE_PATTERN.match(token)
        if reference:
            return self.reference_resolve(
                reference.group(1), reference.group(2).split(":")
            )

        number: int | float | None = number_parse(token)
        if number is not None:
            return number

        lowered: str = token.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if lowered != "null" and token:
            LOG(f"Unrecognized argument treated as null: {token}")
        return None
