"""
Local registry for values that are not globals.

Code that renders a page can register a local value and embed the returned
key in a tag, e.g. f"<registry:{key}/>", to have it substituted later in the
same request. Keys are 64 random hex characters, so a tag cannot guess
another request's entries.
"""

import secrets
from typing import Any, Self


def registryKey_generate(nbytes: int = 32) -> str:
    """
    Generate an unguessable registry key of 2 * nbytes hex characters.

    :param nbytes: Number of random bytes behind the key.
    :return: A hex key usable as a `registry:<key>` tag segment.
    """
    return secrets.token_hex(nbytes)


class LocalRegistry:
    """Request-scoped store exposing local values to `registry:` tags."""

    def __init__(self: Self) -> None:
        self._values: dict[str, Any] = {}

    def register(self: Self, value: Any) -> str:
        """Store a value and return the key that references it.

        Args:
            value: Any value a tag should be able to reach

        Returns:
            Key to embed in a tag, e.g. f"<registry:{key}/>"
        """
        key: str = registryKey_generate()
        while key in self._values:
            key = registryKey_generate()
        self._values[key] = value
        return key

    def as_mapping(self: Self) -> dict[str, Any]:
        return self._values

    def __len__(self: Self) -> int:
        return len(self._values)

    def __contains__(self: Self, key: object) -> bool:
        return key in self._values
