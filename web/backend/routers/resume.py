#!/usr/bin/env python3
"""
Resume endpoints - upload/parse, fetch, list and delete resumes, and read
back the structured profile mirrored from them.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from etl.resume.text_extractor import TextExtractor
from ..auth import AuthenticatedUser, get_current_user
from ..config import get_config
from ..dependencies import get_resume_service
from ..models.responses import DataResponse, ResumeListResponse, ResumeResponse, MessageResponse
from ..services import ResumeService

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/resume", tags=["resume"])

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
}

# Clients that cannot tell the type send one of these; the extension decides
GENERIC_CONTENT_TYPES = {None, "", "application/octet-stream"}


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": f"Too many requests: {exc.detail}"}
    )


def _upload_limit() -> str:
    return get_config().rate_limit.upload_limit


def _validate_upload(file: Optional[UploadFile], content: bytes, max_bytes: int) -> None:
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {max_bytes // (1024 * 1024)}MB)"
        )

    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type in ALLOWED_CONTENT_TYPES:
        return
    if content_type in GENERIC_CONTENT_TYPES and TextExtractor().is_supported(file.filename):
        return
    raise HTTPException(
        status_code=400,
        detail="Invalid file type. Only PDF, DOC, DOCX, and TXT files are allowed."
    )


@router.post("/parse", response_model=ResumeResponse)
@limiter.limit(_upload_limit)
async def parse_resume(
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """
    Upload a resume file and extract structured data from it.

    Accepts PDF, DOC, DOCX or plain text up to the configured size limit.
    The file is stored, the structured record saved, and both returned.
    """
    content = await file.read() if file is not None else b""
    _validate_upload(file, content, request.app.state.config.web.max_upload_bytes)

    logger.info(f"Parsing resume {file.filename!r} ({len(content)} bytes) for user {user.uid}")
    data = await run_in_threadpool(
        service.parse_and_store, user.uid, content, file.filename, file.content_type
    )

    return ResumeResponse(message="Resume parsed successfully", data=data)


@router.get("", response_model=ResumeResponse)
def get_latest_resume(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Get the user's most recently uploaded resume."""
    return ResumeResponse(message="Resume retrieved", data=service.get_latest(user.uid))


@router.get("/all", response_model=ResumeListResponse)
def list_resumes(
    limit: int = Query(10, ge=1, le=50, description="Maximum resumes to return"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """List the user's resumes, newest first."""
    resumes = service.list_resumes(user.uid, limit)
    return ResumeListResponse(
        message="Resumes retrieved",
        data={"resumes": resumes, "count": len(resumes)},
    )


@router.get("/profile", response_model=DataResponse)
def get_structured_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Education, experience and skills mirrored from the latest resume."""
    return DataResponse(
        message="Structured profile fetched successfully",
        data=service.get_profile(user.uid),
    )


@router.delete("/{resume_id}", response_model=MessageResponse)
def delete_resume(
    resume_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Delete a resume and its stored file."""
    service.delete_resume(user.uid, resume_id)
    return MessageResponse(message="Resume deleted successfully")
