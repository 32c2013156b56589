import datetime as dt

from sqlalchemy import DateTime
from sqlmodel import Column, Field, SQLModel

from movieshelf.utils import now_utc

__all__ = [
    "User",
]


class User(SQLModel, table=True):
    __tablename__ = "users"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    created_at: dt.datetime = Field(
        default_factory=now_utc,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
