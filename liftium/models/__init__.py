"""ORM models - import all so Base.metadata is complete for migrations."""

from liftium.models.document import StoredDocument

__all__ = ["StoredDocument"]
