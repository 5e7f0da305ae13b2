import logging

from sqlalchemy.orm import Session

from .base import Base, SessionLocal, engine  # noqa

logger = logging.getLogger("luxboard")


class GetDB:  # Context Manager
    def __init__(self):
        self.db = SessionLocal()

    def __enter__(self):
        return self.db

    def __exit__(self, exc_type, exc_value, traceback):
        if isinstance(exc_value, Exception):
            self.db.rollback()
        self.db.close()


def get_db():  # Dependency
    with GetDB() as db:
        yield db


def init_db(bind=None):
    """Create any missing tables. Migrations are the source of truth in production."""
    from app.db import models  # noqa: F401 - registers the tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.debug("Database tables ensured")


from .models import Account, AccountUsage, Plan  # noqa
from . import crud  # noqa

__all__ = [
    "GetDB",
    "get_db",
    "init_db",
    "Session",
    "crud",
    "Account",
    "AccountUsage",
    "Plan",
    "Base",
    "engine",
]
