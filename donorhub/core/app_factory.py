from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .container import ApplicationContainer, build_container
from .logging import configure_logging
from ..domain.errors import DonorHubError
from ..infrastructure.persistence.mongo import MongoPersistence
from ..presentation.api.routers import admin as admin_router
from ..presentation.api.routers import donation_requests as donation_requests_router
from ..presentation.api.routers import fundings as fundings_router
from ..presentation.api.routers import users as users_router
from ..services.identity_provider import JWTIdentityProvider
from ..services.stripe_service import StripeService

logger = logging.getLogger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[ApplicationContainer] = None,
) -> FastAPI:
    """Build the API; a prebuilt container skips the MongoDB connection."""
    settings = settings or (container.settings if container else Settings())

    app = FastAPI(title="Blood Donation Coordination API", lifespan=_create_lifespan(settings, container))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app, settings)

    app.include_router(users_router.router)
    app.include_router(users_router.donors_router)
    app.include_router(donation_requests_router.router)
    app.include_router(fundings_router.router)
    app.include_router(admin_router.router)

    @app.get("/")
    async def root() -> Dict[str, str]:
        return {"message": "Blood donation server is running"}

    @app.get("/health")
    def health() -> Dict[str, Any]:
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        return {"ok": True, "database": container.persistence.ping()}

    return app


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    def _error_body(message: str, exc: Exception) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": message}
        if not settings.is_production:
            body["error"] = str(exc)
        return body

    @app.exception_handler(DonorHubError)
    async def handle_domain_error(request: Request, exc: DonorHubError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception("Database failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Database error", exc),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error", exc),
        )


def _create_lifespan(settings: Settings, prebuilt: Optional[ApplicationContainer]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        if prebuilt is not None:
            app.state.container = prebuilt  # type: ignore[attr-defined]
            yield
            return

        client: MongoClient = MongoClient(settings.mongodb_uri, tz_aware=True)
        persistence = MongoPersistence(client[settings.mongodb_database])
        identity_provider = JWTIdentityProvider(
            settings.identity_token_secret,
            algorithms=settings.identity_token_algorithms,
            audience=settings.identity_token_audience,
            issuer=settings.identity_token_issuer,
        )
        stripe_service = StripeService(settings.stripe_secret_key)

        container = build_container(
            settings,
            persistence,
            identity_provider,
            stripe_service,
        )
        app.state.container = container  # type: ignore[attr-defined]
        logger.info("Connected to MongoDB database %s", settings.mongodb_database)

        try:
            yield
        finally:
            client.close()

    return lifespan
