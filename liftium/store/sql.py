"""Document store on a single SQLAlchemy table (PostgreSQL JSONB / SQLite JSON)."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from liftium.core.errors import NotFound, StoreFailure
from liftium.models.document import StoredDocument
from liftium.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)

# Driver and socket errors (e.g. asyncpg on connect) surface as OSError
_STORE_ERRORS = (SQLAlchemyError, OSError)


def _field_equals(field: str, value: Any):
    """Equality on one top-level JSON field, typed so both dialects compare natively."""
    element = StoredDocument.data[field]
    if value is None:
        return element.as_string().is_(None)
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


class SqlDocumentStore(DocumentStore):
    """Each call is its own unit of work (committed immediately), like a remote document DB."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def set(self, collection: str, doc_id: str, fields: Document) -> None:
        try:
            async with self._session_maker() as session:
                row = await session.get(StoredDocument, (collection, doc_id))
                if row is None:
                    session.add(StoredDocument(collection=collection, id=doc_id, data=dict(fields)))
                else:
                    row.data = dict(fields)
                await session.commit()
        except _STORE_ERRORS as e:
            logger.exception("set %s/%s failed", collection, doc_id)
            raise StoreFailure(f"Failed to write {collection}/{doc_id}") from e

    async def get(self, collection: str, doc_id: str) -> Document | None:
        try:
            async with self._session_maker() as session:
                row = await session.get(StoredDocument, (collection, doc_id))
                return dict(row.data) if row is not None else None
        except _STORE_ERRORS as e:
            logger.exception("get %s/%s failed", collection, doc_id)
            raise StoreFailure(f"Failed to read {collection}/{doc_id}") from e

    async def query(self, collection: str, field: str, value: Any) -> list[Document]:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(StoredDocument.data).where(
                        StoredDocument.collection == collection,
                        _field_equals(field, value),
                    )
                )
                return [dict(data) for data in result.scalars().all()]
        except _STORE_ERRORS as e:
            logger.exception("query %s where %s failed", collection, field)
            raise StoreFailure(f"Failed to query {collection}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            async with self._session_maker() as session:
                await session.execute(
                    delete(StoredDocument).where(
                        StoredDocument.collection == collection,
                        StoredDocument.id == doc_id,
                    )
                )
                await session.commit()
        except _STORE_ERRORS as e:
            logger.exception("delete %s/%s failed", collection, doc_id)
            raise StoreFailure(f"Failed to delete {collection}/{doc_id}") from e

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        try:
            async with self._session_maker() as session:
                row = await session.get(StoredDocument, (collection, doc_id))
                if row is None:
                    raise NotFound(f"{collection}/{doc_id} not found")
                # Reassign so the JSON column is flagged dirty
                row.data = {**row.data, **fields}
                await session.commit()
        except _STORE_ERRORS as e:
            logger.exception("update %s/%s failed", collection, doc_id)
            raise StoreFailure(f"Failed to update {collection}/{doc_id}") from e

    async def ping(self) -> None:
        try:
            async with self._session_maker() as session:
                await session.execute(text("SELECT 1"))
        except _STORE_ERRORS as e:
            raise StoreFailure("Database unreachable") from e
