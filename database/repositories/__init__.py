from database.repositories.base import BaseRepository
from database.repositories.resume import ResumeRepository
from database.repositories.profile import ProfileRepository

__all__ = [
    'BaseRepository',
    'ResumeRepository',
    'ProfileRepository',
]
