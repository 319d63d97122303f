"""
Local Directory API Server

FastAPI server with:
- Nearby shop ranking, search and categories (MongoDB or bundled sample data)
- Question bank CRUD and server-side quiz sessions
- Current user lookup and signup
- Rate limiting, CORS, structured logging
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import app_state
from config import get_config
from core.exceptions import AppError
from core.logger import configure_logging, get_logger
from core.rate_limiter import get_limiter
from routers import auth_router, directory_router, quiz_router

config = get_config()
configure_logging(config.log_level, json_output=config.is_production)
logger = get_logger("server")

# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info(
        "Starting Local Directory API",
        environment=config.environment,
        database_configured=config.database_configured,
    )
    yield
    await app_state.cleanup()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Local Directory API",
    description="Local shop directory and education quiz backend",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiter
app.state.limiter = get_limiter()
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors as ``{"error": ..., "details": ...}``."""
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(directory_router)
app.include_router(quiz_router)
app.include_router(auth_router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok",
        "message": "Local Directory API",
        "environment": config.environment,
        "database_configured": config.database_configured,
    }


@app.get("/health")
async def health_check():
    """Detailed health check (config summary, no secrets)."""
    return {
        "status": "healthy",
        "environment": config.environment,
        "database_configured": config.database_configured,
        "config": config.to_dict(),
    }


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
