from collections.abc import Generator
from contextlib import contextmanager
from typing import Annotated

import aiohttp
from fastapi import Depends, Request
from sqlmodel import Session

from movieshelf.core import db


def get_db() -> Generator[Session, None, None]:
    with Session(db.engine) as session:
        yield session


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Session for work running outside a request dependency, e.g. worker threads."""
    with Session(db.engine) as session:
        yield session


def get_http_session(request: Request) -> aiohttp.ClientSession:
    return request.app.state.http_session


SessionDep = Annotated[Session, Depends(get_db)]
HttpSessionDep = Annotated[aiohttp.ClientSession, Depends(get_http_session)]
