import os
import tempfile
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

_runtime_dir = tempfile.mkdtemp(prefix="portfolio-api-tests-")

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_runtime_dir, 'app.db')}"
os.environ["JWT_SECRET"] = "test-jwt-secret-0123456789abcdefghijklmnop"
os.environ["ADMIN_API_KEY"] = "test-admin-api-key-0123456789abcdefghijkl"
os.environ["ADMIN_PASSWORD"] = "correct-horse-battery"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOGIN_FAILURE_DELAY_SECONDS"] = "0"
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"
os.environ["REVOCATION_STORE_URL"] = "memory://"
os.environ["EMAILS_FROM_EMAIL"] = ""
os.environ["ADMIN_EMAIL"] = ""

from portfolio_api.core.rate_limiter import api_limiter, contact_limiter, login_limiter  # noqa: E402
from portfolio_api.core.revocation import revocation_store  # noqa: E402
from portfolio_api.db.base import Base  # noqa: E402
from portfolio_api.db.session import get_db  # noqa: E402
from portfolio_api.main import app  # noqa: E402

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]
ADMIN_API_KEY = os.environ["ADMIN_API_KEY"]


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    db_file = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    db_file.close()

    engine = create_engine(
        f"sqlite:///{db_file.name}",
        connect_args={"check_same_thread": False},
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
        os.unlink(db_file.name)


def _reset_shared_state() -> None:
    for limiter in (api_limiter, login_limiter, contact_limiter):
        limiter.reset()
    revocation_store.clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    _reset_shared_state()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    _reset_shared_state()


def _login(client: TestClient, password: str = ADMIN_PASSWORD):
    return client.post("/api/v1/auth/login", json={"password": password})


@pytest.fixture()
def admin_token(client: TestClient) -> str:
    response = _login(client)
    assert response.status_code == 200
    # Tests pick their credential explicitly; drop the session cookie.
    client.cookies.clear()
    return response.json()["token"]


@pytest.fixture()
def auth_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}
