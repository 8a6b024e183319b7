import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from keepsake.domain.exceptions import (KeepsakeException,
                                        ResourceNotFoundException,
                                        ValidationException)
from keepsake.infrastructure.config.settings import get_settings
from keepsake.infrastructure.exceptions import (StorageException,
                                                StorageNotFoundError)
from keepsake.infrastructure.external.storage import LocalUploadStorage
from keepsake.infrastructure.persistence import JsonTimelineRepository
from keepsake.presentation.api.dependencies import (get_timeline_repository,
                                                    get_upload_storage)
from keepsake.presentation.api.v1.routes import (items, start_date, static,
                                                 uploads)
from keepsake.presentation.middleware.security import (
    RequestSizeLimitMiddleware, SecurityHeadersMiddleware)
from keepsake.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    setup_logging()

    try:
        get_upload_storage().ensure_root()
    except OSError as e:
        logger.warning(f"Upload directory unavailable: {e}. Uploads will fail until it exists.")

    logger.info(
        f"{settings.app_name} {settings.app_version} serving "
        f"document={settings.data_path} uploads={settings.upload_dir} "
        f"public={settings.public_dir} admin={settings.admin_dir}"
    )

    yield

    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware (order matters - applied in reverse)
# 1. Request size limit (first check)
app.add_middleware(RequestSizeLimitMiddleware, max_request_size=settings.max_request_size)

# 2. Security headers, upload sandboxing
app.add_middleware(SecurityHeadersMiddleware)

# 3. CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request body",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


@app.exception_handler(ResourceNotFoundException)
@app.exception_handler(StorageNotFoundError)
async def not_found_handler(request: Request, exc: KeepsakeException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=exc.to_dict())


@app.exception_handler(StorageException)
async def storage_exception_handler(request: Request, exc: StorageException):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_dict())


# Routers
app.include_router(items.router, prefix="/api/items", tags=["items"])
app.include_router(start_date.router, prefix="/api/startDate", tags=["timeline"])
app.include_router(uploads.router, prefix="/api", tags=["uploads"])


@app.get("/health")
async def health_check(
    repository: JsonTimelineRepository = Depends(get_timeline_repository),
    storage: LocalUploadStorage = Depends(get_upload_storage),
):
    """
    Health check endpoint for monitoring.

    Validates:
    - API is responsive
    - Timeline document state (a recovered document is degraded, not unhealthy)
    - Upload directory is readable

    Returns:
    - 200 OK if healthy
    - 503 Service Unavailable if unhealthy
    """
    checks: dict[str, Any] = {
        "api": True,  # If we got here, API is responding
        "document": None,
        "uploads": False,
    }

    async with repository.lock:
        result = await repository.load()
    checks["document"] = result.status.value

    try:
        await storage.list_files()
        checks["uploads"] = True
    except StorageException as e:
        checks["error"] = e.message

    if checks["api"] and checks["uploads"]:
        return {"status": "healthy", "checks": checks}
    return JSONResponse(
        status_code=503, content={"status": "unhealthy", "checks": checks}
    )


# Static routes hold a catch-all path, so they go last
app.include_router(static.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("keepsake.main:app", host=settings.host, port=settings.port)
