"""
LLM Provider Interface - Abstract base for generative AI providers.

This module defines the interface the resume pipeline and AI endpoints use,
so the Vertex AI client can be swapped or mocked.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class LLMProvider(ABC):
    """
    Abstract Interface for generative AI service providers.
    """

    @abstractmethod
    def extract_resume_data(self, text: str) -> Dict[str, Any]:
        """
        Extract structured resume fields from plain resume text.

        Args:
            text: Decoded resume text

        Returns:
            Parsed JSON object (personalInfo, summary, skills, experience, ...)

        Raises:
            LLMExtractionError: On any provider or parse failure
        """
        pass

    @abstractmethod
    def generate_text(self, prompt: str, call_type: str) -> str:
        """
        Generate free text for a prompt using the profile of ``call_type``.

        Raises:
            LLMExtractionError: On any provider failure
        """
        pass
