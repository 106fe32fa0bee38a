"""
Pydantic models describing the JSON the LLM must return for resume extraction.

The generated JSON schema is embedded verbatim in the extraction prompt.
The parsed reply is normalized into ``etl.resume.models.StructuredResume``.
"""
import json
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class LlmPersonalInfo(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = Field(description="Candidate full name")
    email: Optional[str] = Field(description="Email address")
    phone: Optional[str] = Field(description="Phone number as written")
    location: Optional[str] = Field(description="City/region as written")
    linkedin: Optional[str] = Field(description="LinkedIn profile URL")
    github: Optional[str] = Field(description="GitHub profile URL")


class LlmSkills(BaseModel):
    model_config = ConfigDict(extra='forbid')

    technical: List[str] = Field(description="Technical skills, languages and frameworks")
    soft: List[str] = Field(description="Interpersonal and soft skills")
    tools: List[str] = Field(description="Tools and platforms")


class LlmExperience(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: Optional[str] = Field(description="Job title or role")
    company: Optional[str] = Field(description="Company or organization name")
    duration: Optional[str] = Field(description="Employment period as written, e.g. 'Jan 2020 - Present'")
    description: Optional[str] = Field(description="Role description, verbatim where possible")
    responsibilities: List[str] = Field(description="Bullet points / key achievements, verbatim")


class LlmEducation(BaseModel):
    model_config = ConfigDict(extra='forbid')

    degree: Optional[str] = Field(description="Degree as written")
    institution: Optional[str] = Field(description="School or university name")
    year: Optional[str] = Field(description="Graduation year, or end year of a range")
    gpa: Optional[str] = Field(description="GPA only if explicitly stated")
    details: Optional[str] = Field(description="Honors, coursework, other details")


class LlmProject(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = Field(description="Project title")
    description: Optional[str] = Field(description="What the project does")
    technologies: List[str] = Field(description="Technologies explicitly listed for the project")


class LlmResume(BaseModel):
    """Complete resume extraction returned by the model."""
    model_config = ConfigDict(extra='forbid')

    personalInfo: LlmPersonalInfo
    summary: Optional[str] = Field(description="Summary/objective text verbatim, without the heading")
    skills: LlmSkills
    experience: List[LlmExperience]
    education: List[LlmEducation]
    certifications: List[str] = Field(description="Certifications and licenses, one per item")
    projects: List[LlmProject]


RESUME_SCHEMA = LlmResume.model_json_schema()

RESUME_SCHEMA_TEXT = json.dumps(RESUME_SCHEMA, indent=2)
