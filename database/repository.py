from sqlalchemy.orm import Session

from database.repositories.resume import ResumeRepository
from database.repositories.profile import ProfileRepository


class ResumeStore:
    """Repositories that share one session, and therefore one transaction."""

    def __init__(self, db: Session):
        self.db = db
        self.resumes = ResumeRepository(db)
        self.profile = ProfileRepository(db)
