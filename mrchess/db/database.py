"""Generate database sessions"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from mrchess.core.config import DatabaseSettings
from mrchess.db.schema import Base


def create_db_engine(settings: DatabaseSettings) -> Engine:
    """Engine for the configured database. All tables are created if they do not exist yet."""
    engine = create_engine(settings.url, echo=settings.echo)
    Base.metadata.create_all(bind=engine)
    return engine


def create_session_factory(settings: DatabaseSettings) -> sessionmaker[Session]:
    return sessionmaker(bind=create_db_engine(settings))


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
