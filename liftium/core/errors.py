"""Error taxonomy shared by repositories, engines and the API layer.

Each error carries the HTTP status the API reports for it; the handlers in
``liftium.main`` turn them into JSON responses.
"""

from __future__ import annotations


class LiftiumError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class Unauthenticated(LiftiumError):
    """No current user for an operation that requires one."""

    status_code = 401

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class NotFound(LiftiumError):
    """Referenced template or parent entity is absent."""

    status_code = 404


class Conflict(LiftiumError):
    """Write would break a uniqueness rule (e.g. duplicate exercise order)."""

    status_code = 409


class DecodeSkip(LiftiumError):
    """One malformed document dropped from a batch read.

    Raised inside the codec only; batch helpers catch it and log the skip.
    """

    status_code = 500

    def __init__(self, kind: str, document_id: str | None, reason: str) -> None:
        super().__init__(f"Skipping {kind} document {document_id or '<no id>'}: {reason}")
        self.kind = kind
        self.document_id = document_id
        self.reason = reason


class StoreFailure(LiftiumError):
    """Underlying document store error; the original error is chained as __cause__."""

    status_code = 502

    def __init__(self, message: str = "Document store failure", completed_steps: int | None = None) -> None:
        super().__init__(message)
        self.completed_steps = completed_steps
