import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.api.v1.api import api_router
from app.core.config import Settings, settings
from app.core.exceptions import AppError, field_errors
from app.storage import Storage, create_storage

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": errors},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def create_app(storage: Optional[Storage] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around a store.

    Without an explicit store one is created from settings (memory or sql).
    Tests pass a fresh store per app.
    """
    app_settings = app_settings or settings
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Production Log API")
    app.state.storage = storage if storage is not None else create_storage(app_settings)

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in app_settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    @app.get(f"{app_settings.API_PREFIX}/health")
    def health():
        return {"status": "ok", "storage": app.state.storage.backend}

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Production Log API"}

    @app.get("/favicon.ico")
    async def favicon():
        """Handle favicon requests to avoid 404 errors"""
        return Response(status_code=204)

    return app


app = create_app()
