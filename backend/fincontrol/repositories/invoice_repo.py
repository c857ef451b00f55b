"""Invoice repository implementation.

Writes are single parameterized statements followed by one commit; a failed
statement rolls the session back before the error propagates, so callers
never see a half-applied row.
"""

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from fincontrol.db.base import Customer as DbCustomer
from fincontrol.db.base import Invoice as DbInvoice
from fincontrol.domain.entities import Invoice as DomainInvoice
from fincontrol.domain.entities import InvoiceSummary
from fincontrol.domain.interfaces import IInvoiceRepository


class InvoiceRepository(IInvoiceRepository):
    """Repository for Invoice persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, invoice_id: str) -> Optional[DomainInvoice]:
        db_invoice = self.db.get(DbInvoice, invoice_id)
        return self._to_domain(db_invoice) if db_invoice else None

    def list_summaries(self) -> List[InvoiceSummary]:
        stmt = (
            select(DbInvoice, DbCustomer)
            .join(DbCustomer, DbInvoice.customer_id == DbCustomer.id)
            .order_by(DbInvoice.date.desc(), DbCustomer.name)
        )
        return [
            InvoiceSummary(
                id=invoice.id,
                amount=invoice.amount,
                status=invoice.status,
                date=invoice.date,
                customer_id=customer.id,
                customer_name=customer.name,
                customer_email=customer.email,
                customer_image_url=customer.image_url,
            )
            for invoice, customer in self.db.execute(stmt).all()
        ]

    def create(self, invoice: DomainInvoice) -> DomainInvoice:
        db_invoice = DbInvoice(
            customer_id=invoice.customer_id,
            amount=invoice.amount,
            status=invoice.status,
            date=invoice.date,
        )
        self.db.add(db_invoice)
        self._commit()
        self.db.refresh(db_invoice)
        return self._to_domain(db_invoice)

    def update(self, invoice: DomainInvoice) -> None:
        if not invoice.id:
            raise ValueError("Invoice ID is required for update")

        # date is intentionally absent: it is fixed at creation
        stmt = (
            update(DbInvoice)
            .where(DbInvoice.id == invoice.id)
            .values(
                customer_id=invoice.customer_id,
                amount=invoice.amount,
                status=invoice.status,
            )
        )
        self._execute_and_commit(stmt)

    def delete(self, invoice_id: str) -> bool:
        result = self._execute_and_commit(
            delete(DbInvoice).where(DbInvoice.id == invoice_id)
        )
        return bool(result.rowcount)

    def _execute_and_commit(self, stmt):
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return result

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _to_domain(self, db_invoice: DbInvoice) -> DomainInvoice:
        """Convert database model to domain entity."""
        return DomainInvoice(
            id=db_invoice.id,
            customer_id=db_invoice.customer_id,
            amount=db_invoice.amount,
            status=db_invoice.status,
            date=db_invoice.date,
        )
