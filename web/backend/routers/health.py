#!/usr/bin/env python3
"""
Service health endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request):
    """Health check endpoint."""
    config = request.app.state.config
    return {
        "status": "healthy",
        "service": "careergenie-api",
        "environment": config.web.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
