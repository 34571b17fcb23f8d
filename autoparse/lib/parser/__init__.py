"""
Parser package for autoparse tag substitution.

Provides the tag scanner, the resolver chain behind it, and the
`resolve_buffer` entry point.
"""

from .base import TagParser, TokenResolver, resolve_buffer
from .resolvers import SourceResolver, TagResolver
from .postprocess import PostProcessorTable, postprocessors_default

__all__ = [
    "TagParser",
    "TokenResolver",
    "resolve_buffer",
    "SourceResolver",
    "TagResolver",
    "PostProcessorTable",
    "postprocessors_default",
]
