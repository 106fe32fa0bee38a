#!/usr/bin/env python3
"""
AI service - text generation features built on the LLM provider.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.cache import ExpiringCache
from core.errors import LLMExtractionError
from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import (
    CHAT_PROMPT_TEMPLATE,
    COVER_LETTER_PROMPT_TEMPLATE,
    HEALTH_PROBE_PROMPT,
    INTERVIEW_QUESTIONS_PROMPT_TEMPLATE,
    SKILL_GAP_PROMPT_TEMPLATE,
)
from core.llm.vertex_service import parse_json_object
from etl.resume.skill_catalog import role_requirements

logger = logging.getLogger(__name__)

HEALTH_CACHE_KEY = "ai:health"
HEALTH_CACHE_SECONDS = 30

FEATURES = [
    "Resume Parsing",
    "Cover Letter Generation",
    "Interview Questions",
    "Skill Gap Analysis",
    "Resume Analysis",
    "Career Chat",
]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _has_skill(skills: List[str], target: str) -> bool:
    """Case-insensitive containment in either direction."""
    target = target.lower()
    return any(target in s.lower() or s.lower() in target for s in skills)


class AIService:
    """Cover letters, interview questions, skill-gap analysis, chat and an AI health probe."""

    def __init__(self, llm_provider: Optional[LLMProvider], cache: ExpiringCache):
        self.llm_provider = llm_provider
        self.cache = cache

    @property
    def available(self) -> bool:
        return self.llm_provider is not None

    def _require_provider(self) -> LLMProvider:
        if self.llm_provider is None:
            raise LLMExtractionError("AI service is not configured")
        return self.llm_provider

    def generate_cover_letter(
        self,
        resume_data: Dict[str, Any],
        job_description: str,
        company_name: Optional[str] = None,
        job_title: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = COVER_LETTER_PROMPT_TEMPLATE.format(
            resume_data=json.dumps(resume_data, indent=2, ensure_ascii=False),
            job_description=job_description,
            company_name=company_name or "the company",
            job_title=job_title or "the position",
        )
        cover_letter = self._require_provider().generate_text(prompt, "cover_letter")
        logger.info(f"Generated cover letter for {job_title or 'unspecified role'}")
        return {
            "coverLetter": cover_letter,
            "companyName": company_name,
            "jobTitle": job_title,
            "generatedAt": _utc_now_iso(),
        }

    def generate_interview_questions(
        self,
        job_title: str,
        experience: Optional[str] = None,
        skills: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Generate interview questions for a role.

        Raises:
            LLMExtractionError: If the provider fails or the reply is not JSON.
        """
        prompt = INTERVIEW_QUESTIONS_PROMPT_TEMPLATE.format(
            job_title=job_title,
            experience=experience or "Not specified",
            skills=", ".join(skills) if skills else "Not specified",
        )
        response = self._require_provider().generate_text(prompt, "interview_questions")
        parsed = parse_json_object(response)
        questions = parsed.get("questions") or []
        if not isinstance(questions, list):
            questions = []
        return {
            "questions": questions,
            "jobTitle": job_title,
            "generatedAt": _utc_now_iso(),
        }

    def analyze_skill_gap(self, current_skills: List[str], target_role: str) -> Dict[str, Any]:
        """
        Compare current skills with the role's catalog requirements and ask
        the model for a learning plan covering the gaps.

        Roles outside the catalog get an empty gap analysis; the model then
        works out the requirements itself.

        Raises:
            LLMExtractionError: If the provider fails or the reply is not JSON.
        """
        skills = [s.strip() for s in current_skills if s and s.strip()]
        requirements = role_requirements(target_role)

        gap = {
            "required": requirements["required"],
            "preferred": requirements["preferred"],
            "matched": [
                s for s in requirements["required"] + requirements["preferred"]
                if _has_skill(skills, s)
            ],
            "missing": [s for s in requirements["required"] if not _has_skill(skills, s)],
            "missingPreferred": [s for s in requirements["preferred"] if not _has_skill(skills, s)],
        }

        prompt = SKILL_GAP_PROMPT_TEMPLATE.format(
            target_role=target_role,
            current_skills=", ".join(skills) or "None listed",
            missing_skills=", ".join(gap["missing"]) or "None identified",
        )
        response = self._require_provider().generate_text(prompt, "skill_gap")
        learning_plan = parse_json_object(response)
        logger.info(f"Skill gap for {target_role}: {len(gap['missing'])} required skills missing")
        return {
            "gapAnalysis": gap,
            "learningPlan": learning_plan,
            "targetRole": target_role,
            "currentSkillsCount": len(skills),
            "generatedAt": _utc_now_iso(),
        }

    def chat(self, message: str, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        prompt = CHAT_PROMPT_TEMPLATE.format(
            context=json.dumps(context, ensure_ascii=False) if context else "None provided",
            message=message,
        )
        reply = self._require_provider().generate_text(prompt, "chat")
        return {"response": reply.strip(), "timestamp": _utc_now_iso()}

    def health(self) -> Dict[str, Any]:
        """
        Probe the model with a tiny prompt. Results are cached for 30 seconds.
        """
        cached = self.cache.get(HEALTH_CACHE_KEY)
        if cached is not None:
            return {**cached, "cached": True}

        checked_at = _utc_now_iso()
        try:
            output = self._require_provider().generate_text(HEALTH_PROBE_PROMPT, "health_probe")
            result = {
                "success": bool(re.search(r"ok", output, re.IGNORECASE)),
                "output": output,
                "checkedAt": checked_at,
            }
        except LLMExtractionError as e:
            logger.warning(f"AI health probe failed: {e}")
            result = {"success": False, "error": str(e), "checkedAt": checked_at}

        self.cache.set(HEALTH_CACHE_KEY, result, HEALTH_CACHE_SECONDS)
        return {**result, "cached": False}

    def status(self) -> Dict[str, Any]:
        return {
            "service": "Vertex AI",
            "status": "active" if self.available else "unavailable",
            "features": FEATURES,
            "timestamp": _utc_now_iso(),
        }
