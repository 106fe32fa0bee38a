"""
Structured resume record - the normalized output of resume extraction.

Every extraction strategy (LLM or heuristic) produces this same shape.
Field names serialize in camelCase for API and document-store consumers.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProcessingMethod(str, Enum):
    LLM_ENHANCED = "llm-enhanced"
    BASIC_FALLBACK = "basic-fallback"


CONFIDENCE_BY_METHOD = {
    ProcessingMethod.LLM_ENHANCED: 0.9,
    ProcessingMethod.BASIC_FALLBACK: 0.7,
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_text(v) for v in value if v is not None)
    return str(value)


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        value = [value]
    return [_as_text(v) for v in value if v is not None and _as_text(v) != ""]


class ResumeModel(BaseModel):
    """Base for resume sub-records: camelCase aliases, immutable, lenient input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PersonalInfo(ResumeModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class ExperienceEntry(ResumeModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""
    responsibilities: List[str] = Field(default_factory=list)

    @field_validator("title", "company", "duration", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("responsibilities", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)


class EducationEntry(ResumeModel):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: str = ""
    details: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class Skills(ResumeModel):
    technical: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        # Deduplicate while keeping first-seen order
        return list(dict.fromkeys(_as_text_list(value)))


class ProjectEntry(ResumeModel):
    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("technologies", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredResume(ResumeModel):
    """Canonical resume record.

    Created once per upload, never mutated. Lists are always present
    (possibly empty); ``processing_method`` and ``confidence`` record which
    strategy produced the record.
    """
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    achievements: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    raw_text: str = ""
    processing_method: ProcessingMethod
    confidence: float
    parsed_at: str = Field(default_factory=_utc_now_iso)

    @field_validator("summary", "raw_text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("achievements", "certifications", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)

    @field_validator("personal_info", "skills", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return {}
        # A flat skill list is treated as technical skills
        if isinstance(value, (list, tuple)):
            return {"technical": value}
        return value

    @field_validator("experience", "education", "projects", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> List[Any]:
        if value is None:
            return []
        if isinstance(value, dict):
            value = [value]
        return [item for item in value if isinstance(item, (dict, BaseModel))]

    @classmethod
    def from_fields(
        cls,
        fields: Dict[str, Any],
        raw_text: str,
        method: ProcessingMethod,
    ) -> "StructuredResume":
        """Build a record from an extractor payload and stamp its provenance.

        Unknown keys are ignored and missing keys get their defaults, so a
        partial LLM payload and a sparse heuristic result normalize to the
        same shape.
        """
        payload = dict(fields or {})
        payload["rawText"] = raw_text
        payload["processingMethod"] = method
        payload["confidence"] = CONFIDENCE_BY_METHOD[method]
        payload.pop("raw_text", None)
        payload.pop("processing_method", None)
        payload.pop("parsedAt", None)
        payload.pop("parsed_at", None)
        return cls.model_validate(payload)

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
