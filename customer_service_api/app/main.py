"""
Main entrypoint for the Customer Service API.

``create_app`` configures logging, builds the FastAPI application,
mounts the versioned routers and registers the exception handlers that
turn service failures into responses.  The app is instantiated at
import time as ``app`` so it can be served directly::

    uvicorn customer_service_api.app.main:app --reload
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exceptions import (
    CustomerAlreadyExistsError,
    ResourceNotFoundError,
    StoreFailureError,
)
from .core.logging_config import setup_logging
from .core import constants
from .schemas.customer import ErrorResponseDto

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, error_code: str, message: str) -> JSONResponse:
    body = ErrorResponseDto(
        api_path=request.url.path,
        error_code=error_code,
        error_message=message,
        error_time=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Map the service exception hierarchy onto HTTP responses."""

    @app.exception_handler(CustomerAlreadyExistsError)
    async def customer_already_exists_handler(request: Request, exc: CustomerAlreadyExistsError) -> JSONResponse:
        return _error_response(request, status.HTTP_409_CONFLICT, "CONFLICT", str(exc))

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
        return _error_response(request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # One message per offending field, keyed by its wire name.
        errors = {}
        for error in exc.errors():
            field = str(error["loc"][-1]) if error.get("loc") else "request"
            errors[field] = error.get("msg", "Invalid value")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)

    @app.exception_handler(StoreFailureError)
    async def store_failure_handler(request: Request, exc: StoreFailureError) -> JSONResponse:
        logger.error("Store failure on %s: %s", request.url.path, exc.__cause__ or exc)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            constants.STATUS_500,
            constants.MESSAGE_500,
        )

    # Anything unexpected.  Details go to the log only.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            constants.STATUS_500,
            constants.MESSAGE_500,
        )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging()

    app = FastAPI(
        title=settings.project_name,
        description="CRUD REST APIs to create, update, fetch and delete customer details",
        version=settings.api_version,
        debug=settings.debug,
        contact={"name": "Customer Service Team"},
        license_info={"name": "Apache 2.0", "url": "https://www.apache.org/licenses/LICENSE-2.0"},
    )

    app.include_router(v1_router, prefix="/api/v1")
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies any
        # pending migrations.
        init_db()

    return app


app = create_app()
