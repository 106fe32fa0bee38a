"""
Profile mirror tables.

Flattened copies of the education, experience and skill lists of a user's
resumes, for querying without unpacking the JSON document. Rows are
derived data: losing them never loses a resume.
"""
import uuid

from sqlalchemy import Column, String, Text, Integer, Index

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class ProfileEducation(Base):
    __tablename__ = 'profile_education'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(128), nullable=False)
    resume_id = Column(String(36), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    degree = Column(Text)
    institution = Column(Text)
    year = Column(Text)
    gpa = Column(Text)
    details = Column(Text)

    __table_args__ = (
        Index('idx_profile_education_user_resume', 'user_id', 'resume_id'),
    )

    def to_dict(self) -> dict:
        return {
            'resumeId': self.resume_id,
            'degree': self.degree,
            'institution': self.institution,
            'year': self.year,
            'gpa': self.gpa,
            'details': self.details,
        }


class ProfileExperience(Base):
    __tablename__ = 'profile_experience'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(128), nullable=False)
    resume_id = Column(String(36), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    title = Column(Text)
    company = Column(Text)
    duration = Column(Text)
    description = Column(Text)

    __table_args__ = (
        Index('idx_profile_experience_user_resume', 'user_id', 'resume_id'),
    )

    def to_dict(self) -> dict:
        return {
            'resumeId': self.resume_id,
            'title': self.title,
            'company': self.company,
            'duration': self.duration,
            'description': self.description,
        }


class ProfileSkill(Base):
    __tablename__ = 'profile_skills'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(128), nullable=False)
    resume_id = Column(String(36), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    category = Column(String(32), nullable=False)  # technical|soft|languages|frameworks|tools
    name = Column(Text, nullable=False)

    __table_args__ = (
        Index('idx_profile_skills_user_resume', 'user_id', 'resume_id'),
    )

    def to_dict(self) -> dict:
        return {'resumeId': self.resume_id, 'category': self.category, 'name': self.name}
