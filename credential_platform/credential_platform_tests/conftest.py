import pytest
from fastapi.testclient import TestClient

from credential_platform.credential_platform.account_service.config import Settings
from credential_platform.credential_platform.account_service.db import (
    Base,
    build_session_factory,
    create_db_engine,
    init_db,
)
from credential_platform.credential_platform.account_service.hashing import PasswordHasher
from credential_platform.credential_platform.account_service.main import create_app
from credential_platform.credential_platform.account_service.service import AccountService
from credential_platform.credential_platform.account_service.store import CredentialStore
from credential_platform.credential_platform.account_service.tokens import TokenIssuer

TEST_SECRET = "test-signing-secret-0123456789abcdef"  # pragma: allowlist secret
# Low work factor keeps the suite fast; production uses the settings default
TEST_ROUNDS = 1000


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'accounts.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(engine):
    return CredentialStore(build_session_factory(engine))


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def tokens():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def service(store, hasher, tokens):
    return AccountService(store, hasher, tokens)


@pytest.fixture
def settings(database_url):
    return Settings(
        JWT_SECRET=TEST_SECRET,
        DATABASE_URL=database_url,
        PASSWORD_HASH_ROUNDS=TEST_ROUNDS,
        ENVIRONMENT="production",
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
