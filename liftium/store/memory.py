"""In-process document store (tests, demo runs)."""

from __future__ import annotations

import copy
from typing import Any

from liftium.core.errors import NotFound
from liftium.store.base import Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Collections kept as dicts of deep-copied documents."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    def _collection(self, name: str) -> dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def set(self, collection: str, doc_id: str, fields: Document) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(fields)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(self, collection: str, field: str, value: Any) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if field in doc
            and doc[field] == value
            and isinstance(doc[field], bool) == isinstance(value, bool)
        ]

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise NotFound(f"{collection}/{doc_id} not found")
        docs[doc_id] = {**docs[doc_id], **copy.deepcopy(fields)}

    def count(self, collection: str) -> int:
        return len(self._collection(collection))
