"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from liftium.api.v1 import api_router
from liftium.core.config import get_settings
from liftium.core.errors import LiftiumError
from liftium.core.routine_templates import TemplateCatalog, default_catalog
from liftium.db.session import async_session_maker, engine
from liftium.store.base import DocumentStore
from liftium.store.memory import InMemoryDocumentStore
from liftium.store.sql import SqlDocumentStore

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to warm up (schema is managed by Alembic); shutdown: dispose the engine."""
    logger.info("%s starting (store backend: %s)", settings.app_name, settings.store_backend)
    yield
    await engine.dispose()


def _build_store() -> DocumentStore:
    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    return SqlDocumentStore(async_session_maker)


async def liftium_error_handler(request: Request, exc: LiftiumError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_application(
    store: DocumentStore | None = None,
    catalog: TemplateCatalog | None = None,
) -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.store = store if store is not None else _build_store()
    app.state.template_catalog = catalog if catalog is not None else default_catalog()

    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS (comma-separated) otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(LiftiumError, liftium_error_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
