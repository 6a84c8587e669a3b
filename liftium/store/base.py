"""Document store interface consumed by repositories and engines."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]


class DocumentStore(ABC):
    """Key-value document collections addressed by string ids.

    Only equality queries are supported; callers sort results themselves.
    Implementations raise StoreFailure for backend errors and NotFound when
    updating a document that does not exist.
    """

    @abstractmethod
    async def set(self, collection: str, doc_id: str, fields: Document) -> None:
        """Create or replace the document."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Document by id, or None."""

    @abstractmethod
    async def query(self, collection: str, field: str, value: Any) -> list[Document]:
        """All documents whose ``field`` equals ``value`` (unordered)."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete the document; deleting a missing document is a no-op."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge ``fields`` into an existing document."""

    async def ping(self) -> None:
        """Raise if the store is unreachable."""
