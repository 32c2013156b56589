from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from movieshelf.core.config import settings
from movieshelf.models import Movie, User, UserMovie  # noqa: F401

DATABASE_URI = settings.SQLALCHEMY_DATABASE_URI

if DATABASE_URI.startswith("sqlite"):
    # One shared connection so an in-memory database survives across sessions
    # and worker threads.
    engine = create_engine(
        DATABASE_URI,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(DATABASE_URI, pool_pre_ping=True)


def init_db(session: Session) -> None:
    """
    Create any missing tables. Production databases are migrated with Alembic;
    this covers fresh SQLite databases used for local runs and tests.
    """
    SQLModel.metadata.create_all(session.get_bind())
