"""Document store adapters."""

from liftium.store.base import Document, DocumentStore
from liftium.store.memory import InMemoryDocumentStore
from liftium.store.sql import SqlDocumentStore

__all__ = ["Document", "DocumentStore", "InMemoryDocumentStore", "SqlDocumentStore"]
