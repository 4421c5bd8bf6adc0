"""
FastAPI Backend for the AI Marketing Agent
"""

import logging
import structlog
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import time
import uuid

from config import settings
from database import init_db
from models import ProjectStatus

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if settings.DEBUG else logging.INFO),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=False,
)

logger = structlog.get_logger()


def ensure_storage_directories():
    """Create the upload, video and website directories"""
    for path in (settings.UPLOAD_PATH, settings.GENERATED_VIDEO_PATH, settings.WEBSITE_PATH):
        Path(path).mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(
        "application_startup",
        ai_provider=settings.AI_PROVIDER,
        full_pipeline=settings.USE_FULL_AI_PIPELINE,
        product_video_provider=settings.PRODUCT_VIDEO_PROVIDER,
    )

    init_db()
    logger.info("database_tables_created", message="Database initialized successfully")

    yield

    logger.info("application_shutdown", message="FastAPI application shutting down")


# Static mounts need their directories at import time
ensure_storage_directories()

# Initialize FastAPI app
app = FastAPI(
    title="AI Marketing Agent API",
    description="Turns product and presenter uploads into a marketing video, a landing page and an Instagram Reel",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static/uploads", StaticFiles(directory=settings.UPLOAD_PATH), name="uploads")
app.mount("/static/generated/videos", StaticFiles(directory=settings.GENERATED_VIDEO_PATH), name="videos")
app.mount("/static/generated/websites", StaticFiles(directory=settings.WEBSITE_PATH), name="websites")


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request; the request id is bound for all log lines it emits"""
    if request.url.path.startswith("/static/"):
        return await call_next(request)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=str(uuid.uuid4()),
        method=request.method,
        path=request.url.path,
    )
    start_time = time.perf_counter()
    logger.info("request_started", client_host=request.client.host if request.client else None)

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error("request_failed", error=str(e), duration=f"{time.perf_counter() - start_time:.3f}s")
        raise

    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration=f"{time.perf_counter() - start_time:.3f}s",
    )
    return response


# Anything the routers did not turn into an HTTPException
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", error=str(exc), exc_type=type(exc).__name__)

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred. Please try again later.",
                "details": str(exc) if app.debug else None,
            }
        },
    )


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint

    Returns:
        dict: Health status of the API
    """
    return {
        "status": "healthy",
        "service": "ai-marketing-agent",
        "version": "1.0.0"
    }


# Include routers
from routers import projects

app.include_router(projects.router)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "AI Marketing Agent API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "statuses": ProjectStatus.all_statuses(),
        "endpoints": {
            "upload": "/api/v1/upload",
            "projects": "/api/v1/projects",
            "project": "/api/v1/projects/{project_id}",
            "generate_video": "/api/v1/projects/{project_id}/generate-video",
            "generate_website": "/api/v1/projects/{project_id}/generate-website",
            "upload_instagram": "/api/v1/projects/{project_id}/upload-instagram"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
