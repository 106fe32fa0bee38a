#!/usr/bin/env python3
"""
Request models for API endpoints.

Request bodies use camelCase keys; snake_case is accepted as well.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoverLetterRequest(CamelModel):
    """Request to generate a cover letter."""
    resume_data: Dict[str, Any] = Field(..., description="Structured resume (parsedData)")
    job_description: str = Field(..., min_length=1, description="Target job description")
    company_name: Optional[str] = Field(None, max_length=200)
    job_title: Optional[str] = Field(None, max_length=200)


class InterviewQuestionsRequest(CamelModel):
    """Request to generate interview questions."""
    job_title: str = Field(..., min_length=2, max_length=200)
    experience: Optional[str] = Field(None, description="Experience level, e.g. 'Senior'")
    skills: Optional[List[str]] = None


class SkillGapRequest(CamelModel):
    """Request to analyze the skill gap for a target role."""
    current_skills: List[str] = Field(..., description="Skills the user already has")
    target_role: str = Field(..., min_length=1, max_length=200)


class AnalyzeResumeRequest(CamelModel):
    """Request to extract structured data from pasted resume text."""
    text: str = Field(..., min_length=1, max_length=100_000)


class ChatRequest(CamelModel):
    """A career guidance question for the AI assistant."""
    message: str = Field(..., min_length=1, max_length=1000)
    context: Optional[Dict[str, Any]] = Field(None, description="Resume data to ground the answer")
