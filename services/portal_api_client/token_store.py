"""In-process token store.

The portal keeps the bearer token in a key-value store that is written at
login and cleared at logout. The request gateway only ever reads from it.
"""

from __future__ import annotations


class InMemoryTokenStore:
    """Dictionary-backed implementation of TokenStoreProtocol."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
