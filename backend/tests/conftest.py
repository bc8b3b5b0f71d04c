"""Shared fixtures: isolated SQLite database, app client and seed helpers."""
import os

from cryptography.fernet import Fernet

# Settings are cached on first import, so configure the environment first
os.environ["DB_AUTO_INIT"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["FIELD_ENCRYPTION_KEY"] = Fernet.generate_key().decode()
os.environ["OTP_DEBUG_ECHO"] = "true"
os.environ["ENTRY_GEOFENCE_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from healfit.main import app  # noqa: E402
from healfit.models.base import Base, get_db  # noqa: E402
from healfit.models.profile import Profile, Role  # noqa: E402
from healfit.models.workout import Workout  # noqa: E402
from healfit.services.auth_service import auth_service  # noqa: E402
from healfit.services.field_encryption import get_field_encryption  # noqa: E402
from healfit.services.otp_service import otp_service  # noqa: E402

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_otp_store():
    otp_service.reset()
    yield
    otp_service.reset()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "healfit-test.db"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(sync_engine):
    """Synchronous session for seeding and inspecting the test database."""
    with Session(sync_engine, expire_on_commit=False) as session:
        yield session


def _override_db(db_path):
    # One connection per session so nothing is shared across event loops
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False, autoflush=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client(db_path, sync_engine):
    _override_db(db_path)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def raw_client(db_path, sync_engine):
    """Client that returns 500 responses instead of re-raising server errors."""
    _override_db(db_path)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_profile(db_session):
    """Factory that stores a profile and returns it."""

    def _create(
        phone: str,
        role: Role = Role.USER,
        password: str = DEFAULT_PASSWORD,
        full_name: str = "",
        **fields,
    ) -> Profile:
        profile = Profile(
            phone=phone,
            role=role,
            password_hash=auth_service.hash_password(password),
            full_name=get_field_encryption().encrypt(full_name),
            **fields,
        )
        db_session.add(profile)
        db_session.commit()
        return profile

    return _create


@pytest.fixture
def create_workout(db_session):
    """Factory that stores a library workout and returns it."""

    def _create(name: str = "Bench Press", **fields) -> Workout:
        workout = Workout(name=name, **fields)
        db_session.add(workout)
        db_session.commit()
        return workout

    return _create


def auth_headers(phone: str, role: Role = Role.USER) -> dict:
    """Bearer header for a profile."""
    token = auth_service.create_access_token(phone, role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def member(create_profile):
    return create_profile(
        "9876543210",
        username="member",
        email="member@example.com",
        full_name="Asha Rao",
    )


@pytest.fixture
def trainer(create_profile):
    return create_profile(
        "9000000001",
        role=Role.TRAINER,
        username="coach",
        email="coach@example.com",
        specialty="Strength",
    )


@pytest.fixture
def admin(create_profile):
    return create_profile(
        "9000000009",
        role=Role.ADMIN,
        username="admin",
        email="admin@example.com",
    )
