from sqlmodel import Session

from movieshelf.crud.utils import dialect_insert
from movieshelf.models.user import User
from movieshelf.utils import now_utc


def get_or_create_user(*, session: Session, username: str) -> User:
    """
    Return the user with `username`, creating it if needed. A single
    INSERT ... ON CONFLICT DO UPDATE ... RETURNING statement, so concurrent
    first writes for the same username still end up with exactly one row.
    Does not commit.

    Parameters:
        session (Session): The database session.
        username (str): The username to look up or create.
    Returns:
        User: The existing or newly created user.
    """
    insert = dialect_insert(session)
    stmt = insert(User).values(username=username, created_at=now_utc())
    # No-op update so RETURNING also yields the row on conflict.
    stmt = stmt.on_conflict_do_update(
        index_elements=["username"],
        set_={"username": stmt.excluded.username},
    ).returning(User)
    user: User = session.scalars(
        stmt, execution_options={"populate_existing": True}
    ).one()
    return user
