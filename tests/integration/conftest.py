"""Live MongoDB fixtures. Tests are skipped when the server cannot be pinged."""

import pytest

from bookstore.config import get_settings
from bookstore.database import (
    AuthorDatabase,
    BookDatabase,
    BookStoreDatabase,
    check_db_connection,
    create_client,
)


@pytest.fixture(scope="session")
def live_auth():
    settings = get_settings()
    return settings.mongodb.model_copy(
        update={
            "database_name": f"{settings.mongodb.database_name}_test",
            "server_selection_timeout_ms": 2000,
        }
    )


@pytest.fixture(scope="session")
def live_client(live_auth):
    client = create_client(live_auth)
    if not check_db_connection(client):
        client.close()
        pytest.skip(f"MongoDB not reachable at {live_auth.sanitized_url}")

    yield client
    client.drop_database(live_auth.database_name)
    client.close()


@pytest.fixture
def author_db(live_auth, live_client):
    db = AuthorDatabase(live_auth, client=live_client)
    db.remove_all()
    return db


@pytest.fixture
def book_db(live_auth, live_client):
    db = BookDatabase(live_auth, client=live_client)
    db.remove_all()
    return db


@pytest.fixture
def store_db(live_auth, live_client):
    db = BookStoreDatabase(live_auth, client=live_client)
    db.remove_all()
    return db
