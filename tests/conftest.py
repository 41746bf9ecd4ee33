"""
Pytest Configuration and Fixtures
Shared test fixtures for database, HTTP clients, and test data

Every test gets its own SQLite database file (aiosqlite) built with
Base.metadata.create_all, so no PostgreSQL server is needed.
"""

from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from fastapi_users.password import PasswordHelper
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import Base, get_db
from app.main import app
from app.models import Case, CaseType, Client, DebtFile, FileStatus, User, UserRole
from app.services.storage_service import StorageService, get_storage_service
from app.users import current_active_user, current_client
from tests.fixtures import (
    TEST_ADMIN_EMAIL,
    TEST_CLIENT_LOGIN,
    TEST_CLIENT_NAME,
    TEST_CLIENT_PASSWORD,
    TEST_EMPLOYEE_EMAIL,
    TEST_USER_PASSWORD,
)

password_helper = PasswordHelper()


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create a test database engine with a fresh schema"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory bound to the test database (used by the reminder sweep)"""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    """Create a test database session"""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def storage_mock():
    """Storage service stand-in (no S3 calls)"""
    storage = MagicMock(spec=StorageService)
    storage.upload_document.side_effect = lambda **kwargs: StorageService.build_key(
        kwargs["document_id"], kwargs["filename"], client_id=kwargs.get("client_id"), file_id=kwargs.get("file_id")
    )
    storage.generate_presigned_url.return_value = "https://s3.example.com/presigned-url"
    return storage


def _override_common(db_session, storage_mock):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage_mock


async def create_staff_user(
    db_session, email: str, name: str, role: UserRole, language: str | None = None, is_active: bool = True
) -> User:
    """Insert a staff user with TEST_USER_PASSWORD"""
    user = User(
        email=email,
        hashed_password=password_helper.hash(TEST_USER_PASSWORD),
        name=name,
        role=role,
        language=language,
        is_active=is_active,
        is_verified=True,
        is_superuser=False,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session):
    """Create an admin staff user"""
    return await create_staff_user(db_session, TEST_ADMIN_EMAIL, "Admin User", UserRole.ADMIN, language="en")


@pytest_asyncio.fixture(scope="function")
async def employee_user(db_session):
    """Create an employee staff user"""
    return await create_staff_user(db_session, TEST_EMPLOYEE_EMAIL, "Employee User", UserRole.EMPLOYEE, language="ar")


@pytest_asyncio.fixture(scope="function")
async def client(db_session, admin_user, storage_mock):
    """HTTP client authenticated as the admin user"""
    _override_common(db_session, storage_mock)
    app.dependency_overrides[current_active_user] = lambda: admin_user

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def employee_client(db_session, employee_user, storage_mock):
    """HTTP client authenticated as the employee user"""
    _override_common(db_session, storage_mock)
    app.dependency_overrides[current_active_user] = lambda: employee_user

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def anon_client(db_session, storage_mock):
    """HTTP client without authentication overrides (real token handling)"""
    _override_common(db_session, storage_mock)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def portal_client(db_session, test_client_record, storage_mock):
    """HTTP client authenticated as the test client (portal)"""
    _override_common(db_session, storage_mock)
    app.dependency_overrides[current_client] = lambda: test_client_record

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client_record(db_session):
    """Create a client with portal credentials"""
    record = Client(
        name=TEST_CLIENT_NAME,
        email="client@office-test.com",
        phone="+21620000000",
        login=TEST_CLIENT_LOGIN,
        hashed_password=password_helper.hash(TEST_CLIENT_PASSWORD),
    )
    db_session.add(record)
    await db_session.commit()
    await db_session.refresh(record)
    return record


@pytest_asyncio.fixture(scope="function")
async def other_client_record(db_session):
    """Create a second client (for isolation tests)"""
    record = Client(name="Other Client", login="other.client.2000", hashed_password=password_helper.hash("x" * 8))
    db_session.add(record)
    await db_session.commit()
    await db_session.refresh(record)
    return record


@pytest_asyncio.fixture(scope="function")
async def test_file(db_session, test_client_record, admin_user):
    """Create a debt-recovery file for the test client"""
    file = DebtFile(
        client_id=test_client_record.id,
        created_by=admin_user.id,
        deposit_date=date(2025, 1, 15),
        debtor="Debtor Company",
        total_amount=1000,
        commission=100,
        status=FileStatus.NEW,
    )
    db_session.add(file)
    await db_session.commit()
    await db_session.refresh(file)
    return file


@pytest_asyncio.fixture(scope="function")
async def test_case_type(db_session, admin_user):
    case_type = CaseType(name="Commercial", created_by=admin_user.id)
    db_session.add(case_type)
    await db_session.commit()
    await db_session.refresh(case_type)
    return case_type


@pytest_asyncio.fixture(scope="function")
async def test_case(db_session, test_client_record, test_file, test_case_type, admin_user):
    """Create a case on the test file"""
    case = Case(
        client_id=test_client_record.id,
        file_id=test_file.id,
        case_type_id=test_case_type.id,
        case_number="2025/117",
        title="Unpaid invoices",
        created_by=admin_user.id,
    )
    db_session.add(case)
    await db_session.commit()
    await db_session.refresh(case)
    return case


@pytest.fixture(scope="function")
def today():
    """Fixed "today" for reminder tests"""
    return date(2025, 3, 10)


@pytest.fixture(scope="function")
def in_days(today):
    return lambda days: today + timedelta(days=days)
