from .base import Base, JsonDocument
from .resume import ResumeDocument, generate_resume_id
from .profile import ProfileEducation, ProfileExperience, ProfileSkill

__all__ = [
    'Base',
    'JsonDocument',
    'ResumeDocument',
    'generate_resume_id',
    'ProfileEducation',
    'ProfileExperience',
    'ProfileSkill',
]
