"""
dataModel.py

This module defines the data models used throughout autoparse.
The models leverage Pydantic for validation and type safety.

Features:
- Enum of value sources a tag can read from
- Parsed tag and path accessor structures
- Resolution results (tag parse, path walk)
- Schema for JSON context documents consumed by the CLI
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Optional, Dict
from enum import Enum
from dataclasses import dataclass


class ValueSource(Enum):
    """
    Enum for the store a tag reads from, keyed by its source selector.
    """

    QUERY = "get"
    FORM = "post"
    COOKIE = "cookie"
    SERVER = "server"
    SESSION = "session"
    REGISTRY = "registry"
    GLOBAL = "global"

    @classmethod
    def from_selector(cls, selector: str) -> "ValueSource":
        """Map a source selector onto its store; anything unknown is a global."""
        for source in cls:
            if source is not cls.GLOBAL and source.value == selector:
                return source
        return cls.GLOBAL


class Tag(BaseModel):
    """
    A tag occurrence recognized in a text buffer.

    Attributes:
        path: Raw, un-split path body (e.g. "user:name")
        post_processor: Optional terminal transform name (e.g. "json")
        raw: True when the tag carried the `~` marker
    """

    path: str = Field(..., min_length=1, description="Raw path body of the tag.")
    post_processor: Optional[str] = Field(
        default=None, description="Terminal post-processor name."
    )
    raw: bool = Field(default=False, description="Suppress HTML sanitization.")

    @property
    def sanitize(self) -> bool:
        return not self.raw


@dataclass(frozen=True)
class KeyAccessor:
    """Path segment that looks up a key or property.

    Attributes:
        name: Key or property name
    """

    name: str


@dataclass(frozen=True)
class CallAccessor:
    """Path segment that invokes a method or free function.

    Attributes:
        name: Method or function name
        raw_args: Unparsed text between the call parentheses
    """

    name: str
    raw_args: str


class ParseResult(BaseModel):
    """Result of a tag or buffer parsing operation.

    Attributes:
        text: The processed text after substitutions
        error: Optional error message if parsing failed
        success: Whether parsing succeeded
    """

    text: str
    error: str | None
    success: bool


class WalkResult(BaseModel):
    """Result of walking a path against a value.

    Attributes:
        value: The value reached (None when the walk failed)
        error: Description of the lookup failure, if any
        success: Whether every accessor resolved
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: Any = None
    error: str | None = None
    success: bool = True


class ContextDocument(BaseModel):
    """
    Schema of a JSON context file used to render a buffer from the CLI.

    Attributes:
        get: Query parameters
        post: Form parameters
        cookie: Cookie map
        server: Server/environment map
        session: Session map
        globals: Named globals for bare tags
    """

    get: Dict[str, Any] = Field(default_factory=dict)
    post: Dict[str, Any] = Field(default_factory=dict)
    cookie: Dict[str, Any] = Field(default_factory=dict)
    server: Dict[str, Any] = Field(default_factory=dict)
    session: Dict[str, Any] = Field(default_factory=dict)
    globals: Dict[str, Any] = Field(default_factory=dict)
