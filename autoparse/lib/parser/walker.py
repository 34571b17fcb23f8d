"""
Path walker: applies accessors to a value.

Starting from the value a source selector produced, each accessor either
looks up a key/property or invokes a method/function. The first accessor
that cannot be applied stops the walk with a failed WalkResult; the walker
itself never raises.

Lookup rules:
- Mapping: the key must exist (a None entry is a successful lookup)
- Sequence: the key must be a decimal index within bounds
- ObjectHandle: the property must be exposed
- Call on an ObjectHandle: the method must be exposed
- Call on None: a free function of that name must be registered
"""

from typing import Any, Iterable, Self
from autoparse.lib.context import FunctionTable
from autoparse.lib.log import LOG
from autoparse.lib.parser.arguments import ArgumentTokenizer
from autoparse.models.dataModel import KeyAccessor, CallAccessor, WalkResult
from autoparse.models.value import MISSING, ObjectHandle, ValueKind, value_kind


def key_lookup(value: Any, key: str) -> Any:
    """Look up a key or property on a value.

    Returns:
        The entry found, or MISSING
    """
    match value_kind(value):
        case ValueKind.MAPPING:
            if key in value:
                return value[key]
            if key.isdecimal() and int(key) in value:
                return value[int(key)]
            return MISSING
        case ValueKind.SEQUENCE:
            if key.isdecimal() and int(key) < len(value):
                return value[int(key)]
            return MISSING
        case ValueKind.OBJECT:
            return value.property_get(key)
        case _:
            return MISSING


class PathWalker:
    """Walk accessor chains against values.

    Attributes:
        functions: Free functions callable without object context
        tokenizer: Turns raw call arguments into values
    """

    def __init__(
        self: Self, functions: FunctionTable, tokenizer: ArgumentTokenizer
    ) -> None:
        self.functions: FunctionTable = functions
        self.tokenizer: ArgumentTokenizer = tokenizer

    def walk(
        self: Self, initial: Any, accessors: Iterable[KeyAccessor | CallAccessor]
    ) -> WalkResult:
        """Apply accessors in order.

        Args:
            initial: Value produced by the source selector
            accessors: Key and call accessors to apply

        Returns:
            WalkResult with the final value, or a failure naming the
            accessor that could not be applied
        """
        value: Any = initial
        for accessor in accessors:
            match accessor:
                case KeyAccessor(name=name):
                    found: Any = key_lookup(value, name)
                    if found is MISSING:
                        return self._fail(f"No key or property '{name}'")
                    value = found
                case CallAccessor(name=name, raw_args=raw_args):
                    result: WalkResult = self.call(value, name, raw_args)
                    if not result.success:
                        return result
                    value = result.value
        return WalkResult(value=value)

    def call(self: Self, value: Any, name: str, raw_args: str) -> WalkResult:
        """Invoke a method on value, or a free function when value is None."""
        bound: bool = isinstance(value, ObjectHandle) and value.method_has(name)
        if not bound and not (value is None and name in self.functions):
            return self._fail(f"No callable '{name}'")

        args: list[Any] = self.tokenizer.tokenize(raw_args)
        try:
            if bound:
                result: Any = value.method_call(name, args)
            else:
                result = self.functions.get(name)(*args)
        except Exception as e:
            return self._fail(f"Call '{name}' raised {type(e).__name__}: {e}")
        return WalkResult(value=result)

    @staticmethod
    def _fail(error: str) -> WalkResult:
        LOG(f"Lookup failed: {error}")
        return WalkResult(value=None, error=error, success=False)
