"""Main FastAPI application."""

from logly import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import health, transcripts
from app.core.config import settings


logger.configure(
    level=settings.log_level,
    color=False,
    show_function=False,
    show_module=False,
    show_filename=False,
    show_lineno=False,
)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include routers
app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(transcripts.router, prefix=settings.api_prefix, tags=["transcripts"])

logger.info(f"{settings.app_name} {settings.app_version} ready (language: {settings.analysis_language})")


@app.get("/")
async def root() -> JSONResponse:
    """Describe the service."""
    return JSONResponse(
        {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
        }
    )
