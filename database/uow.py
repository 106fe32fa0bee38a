import contextlib
import logging

from database.database import Database
from database.repository import ResumeStore

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def resume_uow(database: Database):
    """Per-unit-of-work transaction scope.

    Yields a ResumeStore bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with resume_uow(database) as store:
            doc = store.resumes.get_by_id(resume_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = database.SessionLocal()
    try:
        store = ResumeStore(session)
        yield store
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
