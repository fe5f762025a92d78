import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from .core.config import settings
from .database import create_db_and_tables
from .exceptions import http_exception_handler, dance_analysis_exception_handler
from .middleware import (
    AnalysisRateLimitMiddleware,
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RequestSizeLimitMiddleware,
)
from .routers import videos_router, comparison_router, dashboard_router
from .application.errors import DanceAnalysisError
from .schemas.common.common import HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}...")
    create_db_and_tables()
    logger.info("Database initialized successfully")
    yield
    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(DanceAnalysisError, dance_analysis_exception_handler)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(AnalysisRateLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded videos are served from here
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount(f"/{settings.UPLOAD_DIR}", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

app.include_router(videos_router.router)
app.include_router(comparison_router.router)
app.include_router(dashboard_router.router)


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", app=settings.APP_NAME, version=settings.APP_VERSION)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dancecoach.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level=settings.LOG_LEVEL.lower()
    )
