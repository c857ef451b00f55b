"""Repository tests for UserRepository against in-memory SQLite."""

import pytest
from sqlalchemy.exc import IntegrityError

from fincontrol.domain.entities import User as DomainUser
from fincontrol.repositories.user_repo import UserRepository


@pytest.fixture
def repo(db_session):
    return UserRepository(db_session)


@pytest.mark.user
class TestUserRepository:
    def test_create_and_lookup_by_email(self, repo):
        created = repo.create(
            DomainUser(name="Ana", email="ana@example.com", password_hash="$2b$10$hash")
        )

        found = repo.get_by_email("ana@example.com")
        assert found.id == created.id
        assert found.password_hash == "$2b$10$hash"
        assert repo.get_by_id(created.id).email == "ana@example.com"

    def test_unknown_email_returns_none(self, repo):
        assert repo.get_by_email("nobody@example.com") is None

    def test_create_requires_hash(self, repo):
        with pytest.raises(ValueError, match="password_hash"):
            repo.create(DomainUser(name="Ana", email="ana@example.com"))

    def test_duplicate_email_violates_unique_index(self, repo):
        repo.create(DomainUser(name="Ana", email="ana@example.com", password_hash="h1"))

        with pytest.raises(IntegrityError):
            repo.create(DomainUser(name="Other", email="ana@example.com", password_hash="h2"))

        # The original row is untouched
        assert repo.get_by_email("ana@example.com").password_hash == "h1"

    def test_db_model_is_login_compatible(self, repo):
        created = repo.create(
            DomainUser(name="Ana", email="ana@example.com", password_hash="h1")
        )

        db_user = repo.get_db_by_email("ana@example.com")
        assert db_user.get_id() == created.id
        assert db_user.is_authenticated
