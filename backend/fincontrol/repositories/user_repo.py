from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from fincontrol.db.base import User as DbUser
from fincontrol.domain.entities import User as DomainUser
from fincontrol.domain.interfaces import IUserRepository


class UserRepository(IUserRepository):
    """Repository for User persistence operations.

    This implementation:
    - Implements IUserRepository interface (Dependency Inversion)
    - Handles data access only (Single Responsibility)
    - Maps between domain entities and database models
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, user_id: str) -> Optional[DomainUser]:
        """Get user by ID, returning domain entity."""
        db_user = self.db.get(DbUser, user_id)
        return self._to_domain(db_user) if db_user else None

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        """Get user by email, returning domain entity."""
        db_user = self.get_db_by_email(email)
        return self._to_domain(db_user) if db_user else None

    def get_db_by_email(self, email: str) -> Optional[DbUser]:
        """Get user by email, returning database model."""
        return self.db.scalars(select(DbUser).where(DbUser.email == email)).first()

    def create(self, user: DomainUser) -> DomainUser:
        """Insert a user whose password has already been hashed."""
        if not user.password_hash:
            raise ValueError("password_hash is required to create a user")

        db_user = DbUser(
            name=user.name,
            email=user.email,
            password=user.password_hash,
        )
        self.db.add(db_user)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_user)
        return self._to_domain(db_user)

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            name=db_user.name,
            email=db_user.email,
            password_hash=db_user.password,
        )
