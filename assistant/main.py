"""
Application entrypoint for the email timezone assistant.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from assistant.config import settings
from assistant.infrastructure.observability.logging import get_logger, setup_logging
from assistant.routes import health, timezone

# Setup logging before creating the app
setup_logging(log_level=settings.get_log_level())
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown. The timezone core holds no resources."""
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        canonical_timezone=settings.CANONICAL_TIMEZONE,
    )

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Email Timezone Assistant",
    description="Timezone detection and conversion for scheduling email threads",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(timezone.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    logger.info(
        "HTTP request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
