"""Business logic services."""

from .resume_service import ResumeService, MirrorOutcome
from .ai_service import AIService
