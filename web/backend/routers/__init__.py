"""API route handlers."""

from .resume import router as resume_router
from .ai import router as ai_router
from .health import router as health_router
