"""
Request-scoped collaborator stores for tag resolution.

A RenderContext bundles everything a tag may read: the five request/session
mappings, the local registry, named globals and the table of free functions.
One context is built per request and passed explicitly to the parser; the
engine holds no state between invocations.

Example:
    context = RenderContext(globals={"user": {"name": "Ada"}})
    context.functions.register("today", lambda: "2024-01-01")
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Self
from pydantic import ValidationError
from autoparse.lib.log import LOG
from autoparse.lib.registry import LocalRegistry
from autoparse.models.dataModel import ContextDocument
from autoparse.models.value import FreeFunction


@dataclass
class RequestStores:
    """The request/session mappings a tag can select by source.

    Attributes:
        query: Query-string parameters (`get:`)
        form: Form parameters (`post:`)
        cookies: Cookie map (`cookie:`)
        server: Server/environment map (`server:`)
        session: Session map (`session:`), the only store tags may modify
    """

    query: dict[str, Any] = field(default_factory=dict)
    form: dict[str, Any] = field(default_factory=dict)
    cookies: dict[str, Any] = field(default_factory=dict)
    server: dict[str, Any] = field(default_factory=dict)
    session: dict[str, Any] = field(default_factory=dict)

    def session_remove(self: Self, key: str) -> bool:
        """Remove a session key; returns whether it was present."""
        if key not in self.session:
            return False
        del self.session[key]
        return True


class FunctionTable:
    """Registration table of free functions callable from tags.

    Only names registered here can be invoked by a call accessor that has
    no object context.
    """

    def __init__(self: Self) -> None:
        self._functions: dict[str, FreeFunction] = {}

    def register(
        self: Self, name: str, function: FreeFunction | None = None
    ) -> FreeFunction | Callable[[FreeFunction], FreeFunction]:
        """Register a function under a name.

        Usable directly, `table.register("upper", str.upper)`, or as a
        decorator, `@table.register("greet")`.

        Raises:
            ValueError: If the name is already registered
        """

        def _register(fn: FreeFunction) -> FreeFunction:
            if name in self._functions:
                raise ValueError(f"Function already registered: {name}")
            self._functions[name] = fn
            return fn

        if function is None:
            return _register
        return _register(function)

    def get(self: Self, name: str) -> FreeFunction | None:
        return self._functions.get(name)

    def __contains__(self: Self, name: object) -> bool:
        return name in self._functions


@dataclass
class RenderContext:
    """Everything one resolution pass may read.

    Attributes:
        stores: Request/session mappings
        registry: Local registry for `registry:` tags
        globals: Named values for bare `<name/>` tags
        functions: Free functions callable without object context
    """

    stores: RequestStores = field(default_factory=RequestStores)
    registry: LocalRegistry = field(default_factory=LocalRegistry)
    globals: dict[str, Any] = field(default_factory=dict)
    functions: FunctionTable = field(default_factory=FunctionTable)


def context_fromDocument(document: ContextDocument) -> RenderContext:
    """Build a RenderContext from a validated context document."""
    return RenderContext(
        stores=RequestStores(
            query=document.get,
            form=document.post,
            cookies=document.cookie,
            server=document.server,
            session=document.session,
        ),
        globals=document.globals,
    )


def context_load(path: Path) -> RenderContext:
    """Load a JSON context document from disk.

    Args:
        path: JSON file with optional `get`, `post`, `cookie`, `server`,
            `session` and `globals` objects

    Returns:
        RenderContext populated from the document

    Raises:
        ValueError: If the file is not valid JSON or does not match the schema
        OSError: If the file cannot be read
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
        return context_fromDocument(ContextDocument.model_validate(data))
    except json.JSONDecodeError as e:
        LOG(f"Context file {path} is not valid JSON: {e}")
        raise ValueError(f"Invalid JSON in context file {path}: {e}") from e
    except ValidationError as e:
        LOG(f"Context file {path} failed validation: {e}")
        raise ValueError(f"Invalid context file {path}: {e}") from e
