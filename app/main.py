import logging
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import check_db_connection, get_db
from app.dependencies import get_upload_store
from app.services.upload_service import UploadStore
from app.utils.exceptions import AppException
from app.middleware.error_handler import (
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from app.api.v1 import auth
from app.api.v1 import vehicles
from app.api.v1 import inquiries
from app.api.v1 import customer_forms

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def run_startup_checks(store: UploadStore, bind: Engine | None = None) -> None:
    """
    The API is useless without a writable upload directory and a reachable
    database, so either failure aborts startup.
    """
    store.ensure_directory()
    if not store.is_writable():
        raise RuntimeError(f"Upload directory is not writable: {store.directory.resolve()}")
    logger.info(f"Upload directory is writable: {store.directory.resolve()}")

    if not check_db_connection(bind):
        raise RuntimeError("Database connection failed")
    logger.info("✅ DB connected")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Vehicle listing API: vehicles with photos and features, inquiries, customer forms",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api/v1"
    app.include_router(auth.router,           prefix=PREFIX, tags=["Auth"])
    app.include_router(vehicles.router,       prefix=PREFIX, tags=["Vehicles"])
    app.include_router(inquiries.router,      prefix=PREFIX, tags=["Inquiries"])
    app.include_router(customer_forms.router, prefix=PREFIX, tags=["Customer Forms"])

    # ─── Static uploads ───────────────────────────────────────────────────────
    # Directory is created by the startup checks, not at import time.
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        run_startup_checks(get_upload_store())
        logger.info(f"CORS enabled for: {settings.get_cors_origins()}")

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/api/health", tags=["Health"])
    def health(
        db:    Session     = Depends(get_db),
        store: UploadStore = Depends(get_upload_store),
    ):
        if not check_db_connection(db.get_bind()):
            return JSONResponse(status_code=500, content={
                "status": "error",
                "message": "Database connection failed",
            })
        return {
            "status": "healthy",
            "message": "Server is running and database is connected",
            "app": settings.APP_NAME,
            "version": "1.0.0",
            "uploadDir": str(store.directory),
            "uploadDirWritable": store.is_writable(),
            "corsOrigins": settings.get_cors_origins(),
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
