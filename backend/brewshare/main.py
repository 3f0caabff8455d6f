"""
Brewshare - Main FastAPI Application

A social beer review backend supporting:
- Cookie-based session authentication (JWT)
- Reviews with cheers and comments
- Friend lists
- Ownership-or-admin authorization
- Image uploads
- Rate Limiting
- Structured Logging
- Prometheus Metrics
"""

import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, status, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .api import api_router
from .exceptions import BrewshareException
from .utils.database import init_db
from .utils.dependencies import get_revocation_list
from .utils.logging import setup_logging, get_logger, configure_uvicorn_logging
from .utils.metrics import setup_metrics
from .utils.rate_limit import limiter

# Setup structured logging
setup_logging(log_level=settings.LOG_LEVEL)
configure_uvicorn_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""

    # Startup
    logger.info("Starting Brewshare", version=settings.VERSION, environment=settings.ENVIRONMENT)

    logger.info("Initializing database")
    init_db()

    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

    revocation_list = get_revocation_list()
    if revocation_list is not None:
        logger.info("Checking Redis connection")
        if revocation_list.health_check():
            logger.info("Redis connection successful")
        else:
            logger.warning("Redis connection failed - logout revocation will not work")

    logger.info("Brewshare started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Brewshare")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    # Brewshare API

    Share beer reviews with friends.

    ## Authentication

    `POST /auth/login` sets an HTTP-only session cookie valid for one hour.
    Every protected endpoint reads that cookie; there is no Authorization
    header path. `POST /auth/logout` clears the cookie.

    ## Authorization

    Updating or deleting a user, review or comment is allowed to its owner
    or to an admin.
    """,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration, login, logout and current identity"},
        {"name": "users", "description": "User profiles and account deletion"},
        {"name": "friends", "description": "The caller's friend list"},
        {"name": "reviews", "description": "Reviews and cheers"},
        {"name": "comments", "description": "Comments on reviews"},
        {"name": "uploads", "description": "Image uploads"},
    ]
)

# Configure CORS; credentials are required for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Cookie"],
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Setup Prometheus metrics
setup_metrics(app)

# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)

# Serve uploaded images
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads"
)


@app.exception_handler(BrewshareException)
async def brewshare_exception_handler(request: Request, exc: BrewshareException):
    """Log and render application errors"""

    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.debug("Authentication failed", path=request.url.path)
    else:
        logger.info(
            "Request rejected",
            path=request.url.path,
            status_code=exc.status_code,
            detail=exc.detail
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures surface as a generic internal error"""

    logger.error(
        "Database error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Middleware for logging requests
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with a per-request id"""

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=uuid.uuid4().hex)

    logger.info(
        "Request received",
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else None
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code
    )

    return response


@app.get("/", tags=["root"])
def root():
    """Root endpoint"""
    return {
        "message": "Brewshare API",
        "version": settings.VERSION,
        "docs": "/docs",
        "status": "operational"
    }


@app.get("/health", tags=["root"], status_code=status.HTTP_200_OK)
def health_check():
    """Health check endpoint"""

    from .utils.database import SessionLocal

    db_healthy = True
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        db_healthy = False
    finally:
        db.close()

    result = {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "version": settings.VERSION
    }

    revocation_list = get_revocation_list()
    if revocation_list is not None:
        redis_healthy = revocation_list.health_check()
        result["redis"] = "connected" if redis_healthy else "disconnected"
        if not redis_healthy:
            result["status"] = "degraded"

    return result


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "brewshare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
