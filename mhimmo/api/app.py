"""FastAPI application factory for the mhimmo API.

Routes are registered explicitly. Application state holds the data store,
the credential table, the token registry and the messaging index; handlers
reach them through ``request.app.state``.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from mhimmo.api.error_handlers import register_error_handlers
from mhimmo.api.routes import auth, contracts, health, messages, properties, users
from mhimmo.api.tokens import TokenRegistry
from mhimmo.config import MhImmoConfig
from mhimmo.logging import setup_logging
from mhimmo.messaging import MessagingIndex
from mhimmo.persistence.adapter import PersistenceAdapter, build_backend
from mhimmo.session import CredentialTable
from mhimmo.store.rental import RentalDataStore

logger = logging.getLogger(__name__)


def create_app(
    store: RentalDataStore | None = None,
    credentials: CredentialTable | None = None,
    config: MhImmoConfig | None = None,
) -> FastAPI:
    """Build the HTTP backend.

    Without an explicit ``store`` the configured key-value backend is
    rehydrated and attached, so every mutation is mirrored, and the
    credential table is read from and written to the same backend.
    """
    config = config or MhImmoConfig()
    backend = None
    if store is None:
        backend = build_backend(config)
        adapter = PersistenceAdapter(backend, pretty=config.storage.pretty_json)
        store = adapter.rehydrate(strict_references=config.strict_references)
        if credentials is None:
            credentials = CredentialTable.load(adapter)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("mhimmo API started with %s", store.summary())
        yield
        if backend is not None and hasattr(backend, "close"):
            backend.close()
        logger.info("mhimmo API shutting down")

    app = FastAPI(title="mhimmo API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.credentials = credentials if credentials is not None else CredentialTable()
    app.state.tokens = TokenRegistry()
    app.state.messaging = MessagingIndex(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    api = APIRouter(prefix=config.api.prefix)
    for module in (health, auth, users, properties, contracts, messages):
        api.include_router(module.router)
    app.include_router(api)

    register_error_handlers(app)
    return app


def create_app_from_env() -> FastAPI:
    """Factory for ``uvicorn --factory``: configure logging and build from env."""
    config = MhImmoConfig.from_env()
    setup_logging(config.log_level, config.log_format)
    return create_app(config=config)
