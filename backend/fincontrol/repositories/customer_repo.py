"""Customer repository implementation."""

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from fincontrol.db.base import Customer as DbCustomer
from fincontrol.domain.entities import Customer as DomainCustomer
from fincontrol.domain.interfaces import ICustomerRepository


class CustomerRepository(ICustomerRepository):
    """Repository for Customer persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, customer_id: str) -> Optional[DomainCustomer]:
        db_customer = self.db.get(DbCustomer, customer_id)
        return self._to_domain(db_customer) if db_customer else None

    def get_all(self) -> List[DomainCustomer]:
        db_customers = self.db.scalars(
            select(DbCustomer).order_by(DbCustomer.name)
        ).all()
        return [self._to_domain(c) for c in db_customers]

    def create(self, customer: DomainCustomer) -> DomainCustomer:
        db_customer = DbCustomer(
            name=customer.name,
            email=customer.email,
            image_url=customer.image_url,
        )
        self.db.add(db_customer)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_customer)
        return self._to_domain(db_customer)

    def update(self, customer: DomainCustomer) -> None:
        if not customer.id:
            raise ValueError("Customer ID is required for update")

        stmt = (
            update(DbCustomer)
            .where(DbCustomer.id == customer.id)
            .values(
                name=customer.name,
                email=customer.email,
                image_url=customer.image_url,
            )
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def delete(self, customer_id: str) -> bool:
        try:
            result = self.db.execute(
                delete(DbCustomer).where(DbCustomer.id == customer_id)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return bool(result.rowcount)

    def _to_domain(self, db_customer: DbCustomer) -> DomainCustomer:
        """Convert database model to domain entity."""
        return DomainCustomer(
            id=db_customer.id,
            name=db_customer.name,
            email=db_customer.email,
            image_url=db_customer.image_url,
        )
