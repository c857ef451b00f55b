"""
Invoice service: validated create/update/delete of invoices.

This service:
- Validates raw form data before any storage access
- Converts the decimal amount to integer cents exactly once
- Collapses store failures into one generic message per operation
- Signals the invoice listing as stale after every successful mutation
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from fincontrol.core.config import INVOICES_PATH
from fincontrol.core.validation import validate_invoice
from fincontrol.domain.entities import Invoice as DomainInvoice
from fincontrol.domain.entities import InvoiceSummary
from fincontrol.domain.interfaces import IInvoiceRepository
from fincontrol.schemas.dtos import ActionResult
from fincontrol.services.context import ActionContext

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    """Round ``amount * 100`` half-up to whole cents."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


class InvoiceService:
    """Application service for invoice use-cases."""

    def __init__(self, invoice_repo: IInvoiceRepository, ctx: ActionContext) -> None:
        self.invoice_repo = invoice_repo
        self.ctx = ctx

    def list_invoices(self) -> List[InvoiceSummary]:
        return self.invoice_repo.list_summaries()

    def get_invoice(self, invoice_id: str) -> Optional[DomainInvoice]:
        return self.invoice_repo.get_by_id(invoice_id)

    def create_invoice(self, raw: Mapping[str, Any]) -> ActionResult:
        """Validate, stamp today's date and insert a new invoice."""
        validation = validate_invoice(raw)
        if not validation.is_valid:
            return ActionResult.failure(
                "Missing Fields. Failed to Create Invoice.", validation.field_errors
            )

        record = validation.to_record()
        invoice = DomainInvoice(
            customer_id=record.customer_id,
            amount=to_minor_units(record.amount),
            status=record.status,
            date=self.ctx.today(),
        )

        try:
            created = self.invoice_repo.create(invoice)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to create invoice",
                extra={
                    "context": {
                        "customer_id": invoice.customer_id,
                        "error": str(e),
                    }
                },
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Create Invoice.")

        logger.info(
            "Invoice created",
            extra={
                "context": {
                    "invoice_id": created.id,
                    "customer_id": created.customer_id,
                    "amount": created.amount,
                }
            },
        )
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.redirect(INVOICES_PATH)

    def update_invoice(self, invoice_id: str, raw: Mapping[str, Any]) -> ActionResult:
        """Overwrite customer, amount and status. The date never changes."""
        validation = validate_invoice(raw)
        if not validation.is_valid:
            return ActionResult.failure(
                "Missing Fields. Failed to Update Invoice.", validation.field_errors
            )

        record = validation.to_record()
        invoice = DomainInvoice(
            id=invoice_id,
            customer_id=record.customer_id,
            amount=to_minor_units(record.amount),
            status=record.status,
        )

        try:
            self.invoice_repo.update(invoice)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to update invoice",
                extra={"context": {"invoice_id": invoice_id, "error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Update Invoice.")

        logger.info("Invoice updated", extra={"context": {"invoice_id": invoice_id}})
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.redirect(INVOICES_PATH)

    def delete_invoice(self, invoice_id: str) -> ActionResult:
        """Delete by id. A missing id is still reported as deleted."""
        try:
            removed = self.invoice_repo.delete(invoice_id)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to delete invoice",
                extra={"context": {"invoice_id": invoice_id, "error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Delete Invoice.")

        logger.info(
            "Invoice deleted",
            extra={"context": {"invoice_id": invoice_id, "removed": removed}},
        )
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.confirmed("Deleted Invoice.")
