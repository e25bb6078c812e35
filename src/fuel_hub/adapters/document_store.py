"""Key-value document store interface."""

from typing import Protocol


class DocumentStore(Protocol):
    """Stores serialized JSON documents under string keys."""

    def get(self, key: str) -> str | None:
        """Return the raw document for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Overwrite the document stored under a key."""
