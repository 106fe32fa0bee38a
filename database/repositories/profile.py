import logging
from typing import Dict, Any, List, Optional

from sqlalchemy import delete, select

from database.models import ProfileEducation, ProfileExperience, ProfileSkill
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

SKILL_CATEGORIES = ('technical', 'soft', 'languages', 'frameworks', 'tools')


class ProfileRepository(BaseRepository):
    def replace_for_resume(self, user_id: str, resume_id: str, parsed_data: Dict[str, Any]) -> int:
        """Write the mirror rows of one resume, replacing any existing ones.

        Args:
            user_id: Owner id
            resume_id: Resume document id
            parsed_data: StructuredResume document (camelCase keys)

        Returns:
            Number of rows written
        """
        self.delete_for_resume(resume_id)

        rows = []
        for position, edu in enumerate(parsed_data.get('education') or []):
            rows.append(ProfileEducation(
                user_id=user_id,
                resume_id=resume_id,
                position=position,
                degree=edu.get('degree'),
                institution=edu.get('institution'),
                year=edu.get('year'),
                gpa=edu.get('gpa'),
                details=edu.get('details'),
            ))

        for position, exp in enumerate(parsed_data.get('experience') or []):
            rows.append(ProfileExperience(
                user_id=user_id,
                resume_id=resume_id,
                position=position,
                title=exp.get('title'),
                company=exp.get('company'),
                duration=exp.get('duration'),
                description=exp.get('description'),
            ))

        skills = parsed_data.get('skills') or {}
        position = 0
        for category in SKILL_CATEGORIES:
            for name in skills.get(category) or []:
                rows.append(ProfileSkill(
                    user_id=user_id,
                    resume_id=resume_id,
                    position=position,
                    category=category,
                    name=name,
                ))
                position += 1

        self.db.add_all(rows)
        self.db.flush()
        return len(rows)

    def list_for_user(self, user_id: str, resume_id: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
        """Read back a user's mirror rows in the order they were written.

        Args:
            user_id: Owner id
            resume_id: Restrict to the rows of one resume

        Returns:
            Dict with ``educations``, ``experiences`` and ``skills`` lists
        """
        result = {}
        for key, model in (
            ('educations', ProfileEducation),
            ('experiences', ProfileExperience),
            ('skills', ProfileSkill),
        ):
            stmt = select(model).where(model.user_id == user_id)
            if resume_id is not None:
                stmt = stmt.where(model.resume_id == resume_id)
            stmt = stmt.order_by(model.resume_id, model.position)
            result[key] = [row.to_dict() for row in self.db.execute(stmt).scalars()]
        return result

    def delete_for_resume(self, resume_id: str) -> None:
        for model in (ProfileEducation, ProfileExperience, ProfileSkill):
            self.db.execute(delete(model).where(model.resume_id == resume_id))
