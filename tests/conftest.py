import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from core.config import Settings
from core.security import PasswordHasher, TokenService
from database import Base
import models.user  # noqa: F401
import models.recipe  # noqa: F401
from main import create_app
from recipes.repository import SqlRecipeRepository
from users.repository import SqlUserRepository

SECRET = "test-secret-key-that-is-long-enough-for-hs256"
PASSWORD = "Test*999"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        secret_key=SECRET,
        jwt_issuer="endeus-test",
        jwt_audience="endeus-clients",
        password_hash_rounds=1000,
        log_dir=str(tmp_path / "log"),
    )


@pytest.fixture
def engine():
    # StaticPool so every connection sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def tokens(settings):
    return TokenService(settings)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def user_repository(engine):
    return SqlUserRepository(engine)


@pytest.fixture
def recipe_repository(engine):
    return SqlRecipeRepository(engine)


@pytest.fixture
def client(settings, engine):
    return TestClient(create_app(settings, engine=engine))


@pytest.fixture
def register(client):
    """Register an account through the API and return its access token."""

    def _register(email, role="ADMIN", password=PASSWORD, name="Test User"):
        res = client.post(
            "/api/v1/register",
            json={"role": role, "email": email, "password": password, "name": name},
        )
        assert res.status_code == 200, res.text
        return res.json()["access_token"]

    return _register


@pytest.fixture
def admin_token(register):
    return register("admin@x.com", role="ADMIN")


@pytest.fixture
def reader_token(register):
    return register("reader@x.com", role="READER")
