"""Database session management for the optional direct read-only connection"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from installment_portal.config import settings

# Only built when DATABASE_URL is configured; otherwise the REST store is used
engine = (
    create_engine(
        settings.database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,
    )
    if settings.database_url
    else None
)

SessionLocal = sessionmaker(autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session and always close it"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
