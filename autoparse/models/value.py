"""
Dynamic values threaded through tag resolution.

Tags resolve to plain Python values: None, bool, int/float, str, any
Sequence or Mapping, or an ObjectHandle. Host objects are never traversed
reflectively; they must be wrapped in an ObjectHandle that names what a tag
may read or call.

Example:
    class Cookie(ObjectHandle):
        properties = ("type", "ingredients")
        methods = ("describe",)

        def __init__(self) -> None:
            self.type = "Chocolate Chip"
            self.ingredients = ["Flour", "Sugar"]

        def describe(self, prefix: str = "") -> str:
            return f"{prefix}{self.type}"
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Callable, ClassVar, Iterable, Self


class _Missing:
    """Marker for a property an object does not expose."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: _Missing = _Missing()


class ValueKind(Enum):
    """Kinds of value the engine distinguishes."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OBJECT = "object"
    OPAQUE = "opaque"


class ObjectHandle:
    """Base class for host objects that tags may traverse.

    Subclasses list the attribute names tags may read in `properties` and
    the callables tags may invoke in `methods`. Nothing else is reachable.
    """

    properties: ClassVar[tuple[str, ...]] = ()
    methods: ClassVar[tuple[str, ...]] = ()

    def _target(self) -> Any:
        return self

    def property_get(self: Self, name: str) -> Any:
        """Return the named property, or MISSING when it is not exposed."""
        if name not in self.properties:
            return MISSING
        return getattr(self._target(), name, MISSING)

    def method_has(self: Self, name: str) -> bool:
        return name in self.methods and callable(
            getattr(self._target(), name, None)
        )

    def method_call(self: Self, name: str, args: list[Any]) -> Any:
        """Invoke an exposed method.

        Raises:
            AttributeError: If the method is not exposed
        """
        if not self.method_has(name):
            raise AttributeError(f"Method not exposed: {name}")
        return getattr(self._target(), name)(*args)

    def export(self: Self) -> dict[str, Any]:
        """Exposed properties as a mapping, used for JSON encoding."""
        exported: dict[str, Any] = {}
        for name in self.properties:
            value = getattr(self._target(), name, MISSING)
            if value is not MISSING:
                exported[name] = value
        return exported

    def countable(self: Self) -> bool:
        """Whether `::count` applies; wrapped strings are not countable."""
        target: Any = self._target()
        if target is self:
            return hasattr(self, "__len__")
        return value_kind(target) in (ValueKind.SEQUENCE, ValueKind.MAPPING)

    def count(self: Self) -> int:
        return len(self._target())

    def __rich_repr__(self) -> Iterable[tuple[str, Any]]:
        yield from self.export().items()


class HostObject(ObjectHandle):
    """Wrap an arbitrary object with explicit allow-lists.

    Example:
        HostObject(user, properties=("name", "email"), methods=("greet",))
    """

    def __init__(
        self: Self,
        obj: Any,
        properties: Iterable[str] = (),
        methods: Iterable[str] = (),
    ) -> None:
        self.obj: Any = obj
        self.properties = tuple(properties)
        self.methods = tuple(methods)

    def _target(self) -> Any:
        return self.obj


def value_kind(value: Any) -> ValueKind:
    """Classify a value for dispatch in the walker and formatter."""
    match value:
        case None:
            return ValueKind.NULL
        case bool():
            return ValueKind.BOOL
        case int() | float():
            return ValueKind.NUMBER
        case str():
            return ValueKind.STRING
        case bytes() | bytearray():
            return ValueKind.OPAQUE
        case ObjectHandle():
            return ValueKind.OBJECT
        case Mapping():
            return ValueKind.MAPPING
        case Sequence():
            return ValueKind.SEQUENCE
        case _:
            return ValueKind.OPAQUE


FreeFunction = Callable[..., Any]
