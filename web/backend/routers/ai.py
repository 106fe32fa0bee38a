#!/usr/bin/env python3
"""
AI endpoints - cover letters, interview questions, skill-gap analysis,
resume text analysis, career chat and service status.

Generation endpoints are charged against the per-user AI rate limit.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..auth import AuthenticatedUser, get_current_user
from ..dependencies import get_ai_service, get_resume_service
from ..models.requests import (
    AnalyzeResumeRequest,
    ChatRequest,
    CoverLetterRequest,
    InterviewQuestionsRequest,
    SkillGapRequest,
)
from ..models.responses import DataResponse
from ..rate_limit import enforce_ai_rate_limit
from ..services import AIService, ResumeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/cover-letter", response_model=DataResponse)
async def generate_cover_letter(
    body: CoverLetterRequest,
    user: AuthenticatedUser = Depends(enforce_ai_rate_limit),
    service: AIService = Depends(get_ai_service),
):
    """Generate a cover letter from resume data and a job description."""
    logger.info(f"Generating cover letter for user {user.uid}")
    data = await run_in_threadpool(
        service.generate_cover_letter,
        body.resume_data,
        body.job_description,
        body.company_name,
        body.job_title,
    )
    return DataResponse(message="Cover letter generated", data=data)


@router.post("/interview-questions", response_model=DataResponse)
async def generate_interview_questions(
    body: InterviewQuestionsRequest,
    user: AuthenticatedUser = Depends(enforce_ai_rate_limit),
    service: AIService = Depends(get_ai_service),
):
    """Generate interview questions for a job title."""
    logger.info(f"Generating interview questions for user {user.uid}: {body.job_title}")
    data = await run_in_threadpool(
        service.generate_interview_questions,
        body.job_title,
        body.experience,
        body.skills,
    )
    return DataResponse(message="Interview questions generated", data=data)


@router.post("/skill-gap-analysis", response_model=DataResponse)
async def analyze_skill_gap(
    body: SkillGapRequest,
    user: AuthenticatedUser = Depends(enforce_ai_rate_limit),
    service: AIService = Depends(get_ai_service),
):
    """Compare the user's skills with a target role and build a learning plan."""
    logger.info(f"Analyzing skill gap for user {user.uid}: {body.target_role}")
    data = await run_in_threadpool(service.analyze_skill_gap, body.current_skills, body.target_role)
    return DataResponse(message="Skill gap analysis completed", data=data)


@router.post("/analyze-resume", response_model=DataResponse)
async def analyze_resume(
    body: AnalyzeResumeRequest,
    user: AuthenticatedUser = Depends(enforce_ai_rate_limit),
    service: ResumeService = Depends(get_resume_service),
):
    """Extract structured data from pasted resume text. Nothing is stored."""
    logger.info(f"Analyzing resume text for user {user.uid} ({len(body.text)} chars)")
    data = await run_in_threadpool(service.analyze_text, body.text)
    return DataResponse(message="Resume analysis completed", data=data)


@router.post("/chat", response_model=DataResponse)
async def chat(
    body: ChatRequest,
    user: AuthenticatedUser = Depends(enforce_ai_rate_limit),
    service: AIService = Depends(get_ai_service),
):
    """Answer a career guidance question."""
    logger.info(f"AI chat for user {user.uid}")
    data = await run_in_threadpool(service.chat, body.message, body.context)
    return DataResponse(message="AI response generated", data=data)


@router.get("/status", response_model=DataResponse)
def ai_status(
    user: AuthenticatedUser = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    """Report whether the AI backend is configured and which features it serves."""
    return DataResponse(message="AI service is running", data=service.status())


@router.get("/health")
async def ai_health(
    user: AuthenticatedUser = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    """Probe the model. Cached for 30 seconds; 503 when the probe fails."""
    result = await run_in_threadpool(service.health)
    return JSONResponse(status_code=200 if result["success"] else 503, content=result)
