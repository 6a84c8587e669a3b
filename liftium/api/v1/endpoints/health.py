"""Health check endpoint for load balancers and monitoring."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from liftium.api.deps import get_store
from liftium.core.errors import StoreFailure
from liftium.store.base import DocumentStore

router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(store: DocumentStore = Depends(get_store)):
    """Readiness: app + document store connectivity."""
    try:
        await store.ping()
        return {"status": "ok", "store": "connected"}
    except StoreFailure as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "store": str(e)},
        )
