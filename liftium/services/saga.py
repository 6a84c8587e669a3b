"""Ordered multi-document writes without transactional guarantees.

A ``WriteSaga`` is a list of put/delete steps executed one after another.
Every step is keyed by document id, so re-running a saga rewrites the same
documents. There is no compensation: when a step fails, the steps before it
stay applied and the failure is raised as ``StoreFailure`` carrying the number
of completed steps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from liftium.core.errors import LiftiumError, StoreFailure
from liftium.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteStep:
    collection: str
    doc_id: str
    document: Document | None = None  # None deletes the document

    @property
    def is_delete(self) -> bool:
        return self.document is None

    async def apply(self, store: DocumentStore) -> None:
        if self.document is None:
            await store.delete(self.collection, self.doc_id)
        else:
            await store.set(self.collection, self.doc_id, self.document)


@dataclass
class WriteSaga:
    name: str
    steps: list[WriteStep] = field(default_factory=list)

    def put(self, collection: str, doc_id: str, document: Document) -> None:
        self.steps.append(WriteStep(collection, doc_id, document))

    def delete(self, collection: str, doc_id: str) -> None:
        self.steps.append(WriteStep(collection, doc_id))

    async def execute(self, store: DocumentStore) -> int:
        """Apply all steps in order; returns the number of steps applied."""
        for done, step in enumerate(self.steps):
            try:
                await step.apply(store)
            except StoreFailure as e:
                e.completed_steps = done
                logger.error(
                    "%s aborted at step %d/%d (%s %s/%s); earlier writes are kept",
                    self.name, done + 1, len(self.steps),
                    "delete" if step.is_delete else "put", step.collection, step.doc_id,
                )
                raise
            except LiftiumError:
                raise
            except Exception as e:
                logger.exception("%s aborted at step %d/%d", self.name, done + 1, len(self.steps))
                raise StoreFailure(
                    f"{self.name} failed writing {step.collection}/{step.doc_id}: {e}",
                    completed_steps=done,
                ) from e
        logger.debug("%s applied %d steps", self.name, len(self.steps))
        return len(self.steps)
