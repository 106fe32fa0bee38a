"""
Resume Extraction Orchestrator - picks the extraction strategy and stamps provenance.

Order of attempts:
1. Decode bytes to text (fatal on failure, nothing to fall back on).
2. LLM extraction, when enabled.
3. Heuristic extraction, unless strict mode forbids the fallback.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from core.config_loader import LlmConfig
from core.errors import LLMExtractionError
from core.llm.interfaces import LLMProvider
from etl.resume.heuristic import extract_resume_heuristic
from etl.resume.models import ProcessingMethod, StructuredResume
from etl.resume.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionPolicy:
    """Which strategies are allowed.

    Attributes:
        llm_enabled: Try LLM extraction first
        strict: Never fall back to heuristics; LLM failure is fatal
    """
    llm_enabled: bool = True
    strict: bool = False

    @classmethod
    def from_config(cls, llm_config: LlmConfig) -> "ExtractionPolicy":
        return cls(llm_enabled=llm_config.enabled, strict=llm_config.strict)


class ResumeExtractionOrchestrator:
    """Turn an uploaded resume into a StructuredResume.

    Has no side effects; persisting the record is up to the caller.
    """

    def __init__(
        self,
        text_extractor: TextExtractor,
        llm_provider: Optional[LLMProvider],
        policy: ExtractionPolicy,
    ):
        self.text_extractor = text_extractor
        self.llm_provider = llm_provider
        self.policy = policy

    def extract(self, content: bytes, filename: str) -> StructuredResume:
        """Decode and extract a resume file.

        Raises:
            DecodeError: If the file cannot be decoded
            LLMExtractionError: If LLM extraction fails in strict mode
        """
        text = self.text_extractor.extract(content, filename)
        return self.extract_text_record(text)

    def extract_text_record(self, text: str) -> StructuredResume:
        """Run the LLM/heuristic strategies on already decoded text."""
        if self.policy.llm_enabled and self.llm_provider is not None:
            try:
                return self._extract_with_llm(text)
            except LLMExtractionError as e:
                if self.policy.strict:
                    logger.error(f"LLM extraction failed and fallbacks are disabled: {e}")
                    raise
                logger.warning(f"LLM extraction failed, falling back to heuristic parser: {e}")
        elif self.policy.strict:
            raise LLMExtractionError("AI extraction is required but not available")

        return StructuredResume.from_fields(
            extract_resume_heuristic(text),
            raw_text=text,
            method=ProcessingMethod.BASIC_FALLBACK,
        )

    def _extract_with_llm(self, text: str) -> StructuredResume:
        payload = self.llm_provider.extract_resume_data(text)
        try:
            record = StructuredResume.from_fields(
                payload,
                raw_text=text,
                method=ProcessingMethod.LLM_ENHANCED,
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise LLMExtractionError(f"LLM response did not match the resume shape: {e}") from e

        logger.info(
            f"LLM extraction succeeded: {len(record.experience)} experience, "
            f"{len(record.education)} education entries"
        )
        return record
