"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A fresh SQLite database per test (file-backed, so concurrent sessions see
  one another's commits exactly as they would on PostgreSQL)
- A TestClient whose container serves that database
- Bearer token helpers for attendees and organizers

Architecture:
- Unit tests (test/**/unit/): use the in-memory doubles from their own conftest.py
- Integration tests: use a real database through SqlAlchemyUnitOfWork
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings, logging and tracing read the environment at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SECRET_KEY'] = 'test_secret_key_for_ticket_inventory'
    os.environ['DEPLOY_ENV'] = 'test'
    os.environ['AUTO_CREATE_TABLES'] = 'true'
    os.environ['DATABASE_URL'] = (
        f'sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / "ticket_inventory_test.db"}'
    )

    # No exporters: tracing stays on the no-op provider
    os.environ.pop('OTEL_EXPORTER_OTLP_ENDPOINT', None)
    os.environ['OTEL_CONSOLE_EXPORT'] = 'false'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from ticket_inventory.platform.config.di import container  # noqa: E402
from ticket_inventory.platform.database.orm_db_setting import Database  # noqa: E402
from ticket_inventory.platform.database.unit_of_work import (  # noqa: E402
    AbstractUnitOfWork,
    SqlAlchemyUnitOfWork,
)
from ticket_inventory.service.ticketing.domain.entity.user_entity import (  # noqa: E402
    UserEntity,
    UserRole,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)


TEST_ORGANIZER = UserEntity(
    id='organizer-1', role=UserRole.ORGANIZER, email='organizer@test.com', name='Test Organizer'
)
ANOTHER_ORGANIZER = UserEntity(
    id='organizer-2', role=UserRole.ORGANIZER, email='organizer2@test.com', name='Other Organizer'
)
TEST_ATTENDEE = UserEntity(
    id='attendee-1', role=UserRole.ATTENDEE, email='attendee@test.com', name='Test Attendee'
)
ANOTHER_ATTENDEE = UserEntity(
    id='attendee-2', role=UserRole.ATTENDEE, email='attendee2@test.com', name='Another Attendee'
)


@pytest.fixture
def organizer() -> UserEntity:
    return TEST_ORGANIZER


@pytest.fixture
def another_organizer() -> UserEntity:
    return ANOTHER_ORGANIZER


@pytest.fixture
def attendee() -> UserEntity:
    return TEST_ATTENDEE


@pytest.fixture
def another_attendee() -> UserEntity:
    return ANOTHER_ATTENDEE


def _sqlite_url(directory: Path) -> str:
    return f'sqlite+aiosqlite:///{directory / "ticketing.db"}'


# =============================================================================
# Database Fixtures
# =============================================================================
@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    database = Database(db_url=_sqlite_url(tmp_path))
    await database.create_tables()
    yield database
    await database.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], AbstractUnitOfWork]:
    """New UoW (and session) per call, the way the container hands them out"""
    return lambda: SqlAlchemyUnitOfWork(database.session_factory)


# =============================================================================
# HTTP Fixtures
# =============================================================================
@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """TestClient running the real lifespan against a per-test SQLite file"""
    from ticket_inventory.main import app

    with container.database.override(providers.Singleton(Database, db_url=_sqlite_url(tmp_path))):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture(scope='session')
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture(scope='session')
def auth_headers(jwt_auth: JwtAuth) -> Callable[[UserEntity], dict[str, str]]:
    def _headers(user: UserEntity) -> dict[str, str]:
        return {'Authorization': f'Bearer {jwt_auth.create_jwt_token(user)}'}

    return _headers


@pytest.fixture
def event_payload() -> Callable[..., dict[str, Any]]:
    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'title': 'Jazz Night',
            'description': 'An evening of live jazz',
            'location': 'Blue Note',
            'category': 'Music',
            'startsAt': (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
            'price': 40,
            'capacity': 3,
        }
        payload.update(overrides)
        return payload

    return _payload
