#!/usr/bin/env python3
"""
CareerGenie API - FastAPI Application

Resume upload and structured extraction, plus AI-assisted career tools.

Usage:
    uv run python -m web.backend.app

Then open:
    - http://localhost:8080/health - Health check (port configurable in config.yaml)
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.app_context import AppContext
from core.config_loader import AppConfig
from .auth import FirebaseIdentityVerifier, IdentityVerifier
from .config import get_config
from .exceptions import register_exception_handlers
from .rate_limit import PerUserRateLimiter
from .routers import resume_router, ai_router, health_router
from .routers.resume import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _attach_context(app: FastAPI, context: AppContext) -> None:
    app.state.context = context
    app.state.ai_rate_limiter = PerUserRateLimiter(
        cache=context.cache,
        max_requests=context.config.rate_limit.ai_max_requests,
        window_seconds=context.config.rate_limit.ai_window_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build whatever create_app was not given."""
    config = app.state.config
    if app.state.context is None:
        _attach_context(app, AppContext.build(config))
    if app.state.identity_verifier is None:
        app.state.identity_verifier = FirebaseIdentityVerifier.from_config(config.auth)
    logger.info(f"CareerGenie API ready (environment: {config.web.environment})")
    yield
    app.state.context.close()


def create_app(
    config: Optional[AppConfig] = None,
    context: Optional[AppContext] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Configuration; defaults to config.yaml plus environment.
        context: Pre-built dependencies; built at startup when omitted.
        identity_verifier: Token verifier; Firebase when omitted.

    Returns:
        Configured FastAPI app.
    """
    config = config or (context.config if context else get_config())

    app = FastAPI(
        title="CareerGenie API",
        description="Resume parsing and AI career tools",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.show_error_details = config.web.is_development
    app.state.context = None
    app.state.identity_verifier = identity_verifier
    if context is not None:
        _attach_context(app, context)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(resume_router)
    app.include_router(ai_router)

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting CareerGenie API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
