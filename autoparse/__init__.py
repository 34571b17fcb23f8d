"""
autoparse: tag substitution for rendered text.

Replaces `<source:path[::post-processor][~]/>` tags in a buffer with values
drawn from request stores, session state, a local registry and named globals.
"""

from autoparse.lib.context import FunctionTable, RenderContext, RequestStores
from autoparse.lib.parser import TagParser, TagResolver, resolve_buffer
from autoparse.lib.registry import LocalRegistry
from autoparse.models.value import HostObject, ObjectHandle

__all__ = [
    "FunctionTable",
    "RenderContext",
    "RequestStores",
    "LocalRegistry",
    "TagParser",
    "TagResolver",
    "resolve_buffer",
    "HostObject",
    "ObjectHandle",
]
