from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session


def dialect_insert(session: Session):
    """
    Return the dialect-specific `insert` construct for the session's engine,
    which is what provides `on_conflict_do_update` / `on_conflict_do_nothing`.
    """
    if session.get_bind().dialect.name == "sqlite":
        return sqlite_insert
    return postgresql_insert
