"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coach.config.settings import get_settings
from coach.config.logging_config import setup_logging
from coach.api.routers import links_router, context_router
from coach.core.exceptions import AppError

_STATUS_BY_CODE = {
    "NOT_FOUND": 404,
    "AGGREGATION_FAILED": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    yield
    # Shutdown (cache is process memory only, nothing to flush)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Financial context aggregation and caching for the AI financial coach",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(links_router)
app.include_router(context_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
