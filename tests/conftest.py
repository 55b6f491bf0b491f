import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from booklibrary.client import BookApi, CredentialStore
from booklibrary.database import Base, get_db
from booklibrary.main import app

# Create engine globally for the test session
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DUNE = {
    "name": "Dune",
    "isbn": "123",
    "description": "d",
    "pageCount": 412,
    "author": "Herbert",
}


@pytest.fixture(scope="module", autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register and sign in a user; returns (user, auth headers)."""

    def _make(username: str, password: str = "password123"):
        user = client.post("/api/register", json={"username": username, "password": password})
        assert user.status_code == 201
        login = client.post("/api/login", json={"username": username, "password": password})
        assert login.status_code == 200
        return user.json(), {"Authorization": f"Bearer {login.json()['token']}"}

    return _make


@pytest.fixture
def credentials(tmp_path):
    return CredentialStore(tmp_path / "credentials.json")


@pytest.fixture
def book_api(client, credentials):
    # The SDK talks to the app in-process through a TestClient transport.
    sdk_client = TestClient(app, base_url="http://testserver/api")
    api = BookApi(client=sdk_client, credentials=credentials)
    yield api
    api.close()


@pytest.fixture
def signed_in_api(book_api):
    book_api.register("reader", "password123")
    book_api.login("reader", "password123")
    return book_api
