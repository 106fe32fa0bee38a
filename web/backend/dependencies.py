#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

Everything is resolved from ``app.state``, which ``create_app`` fills in;
tests replace individual dependencies with ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from core.app_context import AppContext
from .services import AIService, ResumeService


def get_app_context(request: Request) -> AppContext:
    """The process-wide AppContext built at startup."""
    return request.app.state.context


def get_resume_service(context: AppContext = Depends(get_app_context)) -> ResumeService:
    """
    FastAPI dependency that yields a ResumeService.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(service: ResumeService = Depends(get_resume_service)):
            ...
    """
    return ResumeService(
        orchestrator=context.orchestrator,
        blob_store=context.blob_store,
        database=context.database,
    )


def get_ai_service(context: AppContext = Depends(get_app_context)) -> AIService:
    return AIService(context.llm_provider, context.cache)
