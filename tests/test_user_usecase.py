from datetime import datetime, timezone
from typing import Optional

import pytest

from core.config import Settings
from core.errors import DuplicateUser, InternalError, InvalidCredential, InvalidRole
from core.security import PasswordHasher, TokenService
from users.entity import NewUser, Role, User
from users.repository import UserRepository
from users.schemas import LoginRequest, RegisterRequest
from users.usecase import UserUsecase


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.users: dict[int, User] = {}
        self.create_calls = 0
        self.create_error: Optional[Exception] = None

    def create(self, user: NewUser) -> tuple[Role, int]:
        self.create_calls += 1
        if self.create_error is not None:
            raise self.create_error
        if self.find_by_email(user.email) is not None:
            raise DuplicateUser()
        now = datetime.now(timezone.utc)
        user_id = len(self.users) + 1
        self.users[user_id] = User(
            user_id=user_id,
            role=user.role,
            email=user.email,
            password=user.password,
            name=user.name,
            profile_image=user.profile_image,
            created_at=now,
            updated_at=now,
        )
        return user.role, user_id

    def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)


class BrokenHasher(PasswordHasher):
    def hash(self, plain: str) -> str:
        raise ValueError("hash backend unavailable")


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def usecase(repository, hasher, tokens):
    return UserUsecase(repository, hasher, tokens)


def _register_body(**overrides):
    body = {"role": "ADMIN", "email": "a@x.com", "password": "Test*999", "name": "Alice"}
    body.update(overrides)
    return RegisterRequest(**body)


def test_register_stores_hash_and_returns_token(usecase, repository, tokens, hasher):
    token = usecase.register(_register_body())

    stored = repository.find_by_email("a@x.com")
    assert stored.role == Role.ADMIN
    assert stored.password != "Test*999"
    assert hasher.verify("Test*999", stored.password)

    claims = tokens.verify(token)
    assert claims.subject == "ADMIN"
    assert claims.token_id == str(stored.user_id)


def test_register_duplicate_email(usecase, repository):
    usecase.register(_register_body())
    with pytest.raises(DuplicateUser):
        usecase.register(_register_body(role="READER", name="Another"))
    assert repository.create_calls == 1


def test_register_duplicate_lost_at_storage(usecase, repository):
    # email was free when checked, taken by the time of the insert
    repository.create_error = DuplicateUser()
    with pytest.raises(DuplicateUser):
        usecase.register(_register_body())


def test_register_role_rejected_by_storage(usecase, repository):
    repository.create_error = InvalidRole()
    with pytest.raises(InvalidRole):
        usecase.register(_register_body())


def test_register_hash_failure(repository, tokens):
    usecase = UserUsecase(repository, BrokenHasher(rounds=1000), tokens)
    with pytest.raises(InternalError):
        usecase.register(_register_body())
    assert repository.create_calls == 0


def test_register_signing_failure(repository, hasher):
    unsigned = TokenService(Settings(database_url="sqlite://", secret_key=""))
    usecase = UserUsecase(repository, hasher, unsigned)
    with pytest.raises(InternalError):
        usecase.register(_register_body())


def test_login(usecase, tokens):
    usecase.register(_register_body(role="READER"))
    token = usecase.login(LoginRequest(email="a@x.com", password="Test*999"))
    assert tokens.verify(token).subject == "READER"


@pytest.mark.parametrize(
    "email, password",
    [("a@x.com", "wrong-pass"), ("nobody@x.com", "Test*999")],
)
def test_login_failures_look_the_same(usecase, email, password):
    usecase.register(_register_body())
    with pytest.raises(InvalidCredential):
        usecase.login(LoginRequest(email=email, password=password))


def test_login_with_unreadable_stored_hash(usecase, repository):
    repository.create(NewUser(role=Role.ADMIN, email="a@x.com", password="plaintext", name="Alice"))
    with pytest.raises(InvalidCredential):
        usecase.login(LoginRequest(email="a@x.com", password="plaintext"))


# -- request validation ------------------------------------------------------


@pytest.mark.parametrize(
    "overrides",
    [
        {"role": "OWNER"},
        {"email": "not-an-email"},
        {"email": "a" * 55 + "@x.com"},
        {"password": "short"},
        {"password": "p" * 21},
        {"name": "Al"},
    ],
)
def test_register_request_rejects(overrides):
    with pytest.raises(ValueError):
        _register_body(**overrides)
