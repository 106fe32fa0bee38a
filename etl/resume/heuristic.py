"""Heuristic resume extraction: section splitting plus regex/keyword field extraction."""
import logging
from typing import Any, Dict

from etl.resume.field_extractors import (
    extract_achievements,
    extract_certifications,
    extract_education,
    extract_experience,
    extract_personal_info,
    extract_skills,
    extract_summary,
)
from etl.resume.sections import HEADER_SECTION, identify_sections, section_body

logger = logging.getLogger(__name__)


def extract_resume_heuristic(text: str) -> Dict[str, Any]:
    """Build StructuredResume fields from plain text without any AI.

    Never raises; a resume with no recognizable structure yields a record
    with empty fields.
    """
    sections = identify_sections(text)
    skills_text = section_body(sections, 'skills') if sections.get('skills') else text

    fields = {
        'personalInfo': extract_personal_info(section_body(sections, HEADER_SECTION)),
        'summary': extract_summary(section_body(sections, 'summary', 'objective')),
        'experience': extract_experience(section_body(sections, 'experience', 'work')),
        'education': extract_education(section_body(sections, 'education')),
        'skills': extract_skills(skills_text),
        'achievements': extract_achievements(text),
        'certifications': extract_certifications(text),
    }

    logger.debug(
        f"Heuristic extraction found sections {sorted(sections)}: "
        f"{len(fields['experience'])} experience, {len(fields['education'])} education entries"
    )
    return fields
