import os

# Must be set before the app settings are imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OMDB_API_KEY"] = "test-key"

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from movieshelf.api.deps import get_db  # noqa: E402
from movieshelf.core.db import engine  # noqa: E402
from movieshelf.main import app  # noqa: E402
from movieshelf.omdb.cache import reset_movie_detail_cache  # noqa: E402

from .fixtures.factories import *  # noqa: E402, F403
from .fixtures.omdb import *  # noqa: E402, F403


@pytest.fixture(scope="function", autouse=True)
def db_transaction() -> Generator[Session, None, None]:
    SQLModel.metadata.create_all(engine)
    session = Session(engine)

    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    SQLModel.metadata.drop_all(engine)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function", autouse=True)
def movie_detail_cache() -> Generator[None, None, None]:
    reset_movie_detail_cache()
    yield
    reset_movie_detail_cache()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
