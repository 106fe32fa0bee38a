from sqlalchemy.orm import Session


class BaseRepository:
    """Repositories never commit; the surrounding unit of work does."""

    def __init__(self, db: Session):
        self.db = db

    def flush(self) -> None:
        self.db.flush()
