#!/usr/bin/env python3
"""
Resume Extraction Module - turn uploaded resume files into structured records.

Handles:
- Text extraction from PDF, Word and plain text uploads
- LLM-based structured extraction with heuristic fallback
- Provenance tagging (processing method and confidence)
"""
from etl.resume.models import StructuredResume, ProcessingMethod, CONFIDENCE_BY_METHOD
from etl.resume.text_extractor import TextExtractor, content_type_for
from etl.resume.orchestrator import ResumeExtractionOrchestrator, ExtractionPolicy

__all__ = [
    'StructuredResume',
    'ProcessingMethod',
    'CONFIDENCE_BY_METHOD',
    'TextExtractor',
    'content_type_for',
    'ResumeExtractionOrchestrator',
    'ExtractionPolicy',
]
