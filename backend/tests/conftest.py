"""
Central pytest configuration for the fincontrol tests.

Environment variables are set before any ``fincontrol`` import so the lazy
engine binds to the in-memory SQLite database and rate limiting stays off.
"""

import os

# Test database configuration (set early so import-time engines use it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("FLASK_SECRET_KEY", "test-secret-key")

from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from fincontrol.core.revalidation import listing_cache  # noqa: E402
from fincontrol.core.security import hash_password  # noqa: E402
from fincontrol.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402
from fincontrol.domain.entities import Customer as DomainCustomer  # noqa: E402
from fincontrol.domain.entities import User as DomainUser  # noqa: E402
from fincontrol.repositories.customer_repo import CustomerRepository  # noqa: E402
from fincontrol.repositories.user_repo import UserRepository  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
    response_helper,
)

TEST_USER_EMAIL = "staff@example.com"
TEST_USER_PASSWORD = "correct-horse"


# =====================================================
# BASIC MOCK FIXTURES
# =====================================================


@pytest.fixture
def mock_db_session():
    """Create a mock database session for testing."""
    session = Mock()
    session.add = Mock()
    session.commit = Mock()
    session.refresh = Mock()
    session.rollback = Mock()
    session.close = Mock()
    session.execute = Mock()
    return session


@pytest.fixture(autouse=True)
def clear_listing_cache():
    """Listing rows are process-wide; never let them leak between tests."""
    listing_cache.clear()
    yield
    listing_cache.clear()


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def db_session():
    """Real session on fresh tables in the shared in-memory database."""
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def customer(db_session):
    """A persisted customer."""
    return CustomerRepository(db_session).create(
        DomainCustomer(
            name="Evil Rabbit",
            email="evil@rabbit.com",
            image_url="/static/customers/placeholder.svg",
        )
    )


@pytest.fixture
def staff_user(db_session):
    """A persisted user with a known password."""
    return UserRepository(db_session).create(
        DomainUser(
            name="Staff Member",
            email=TEST_USER_EMAIL,
            password_hash=hash_password(TEST_USER_PASSWORD),
        )
    )


# =====================================================
# FLASK APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app(db_session):
    """Create a Flask application for testing with proper configuration."""
    from fincontrol.main import create_app

    app = create_app()
    app.config.update(
        {
            "TESTING": True,
            "WTF_CSRF_ENABLED": False,  # Disable CSRF for testing
            "SECRET_KEY": "test-secret-key",
            "PROPAGATE_EXCEPTIONS": True,  # Show exceptions in tests
        }
    )
    return app


@pytest.fixture
def client(app):
    """Create a test client for Flask application with proper context."""
    with app.test_client() as client:
        with app.app_context():
            yield client


@pytest.fixture
def auth_client(client, staff_user):
    """Test client with a signed-in staff session."""
    response = client.post(
        "/login", data={"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD}
    )
    assert response.status_code == 302
    return client
