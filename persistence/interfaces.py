from __future__ import annotations

from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    One JSON object kept whole. Backs both the service's shared document and
    the client's local-storage file; callers read it all and write it all.
    """

    def load(self) -> dict[str, Any]:
        """Return the stored object, or {} when nothing usable is stored."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Replace the stored object with doc."""
        ...
