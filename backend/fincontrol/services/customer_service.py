"""Customer service: validated create/update/delete of customers."""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from fincontrol.core.config import (
    CUSTOMERS_PATH,
    INVOICES_PATH,
    get_customer_placeholder_image_url,
)
from fincontrol.core.validation import validate_customer
from fincontrol.domain.entities import Customer as DomainCustomer
from fincontrol.domain.interfaces import ICustomerRepository
from fincontrol.schemas.dtos import ActionResult
from fincontrol.services.context import ActionContext

logger = logging.getLogger(__name__)


class CustomerService:
    """Application service for customer use-cases."""

    def __init__(self, customer_repo: ICustomerRepository, ctx: ActionContext) -> None:
        self.customer_repo = customer_repo
        self.ctx = ctx

    def list_customers(self) -> List[DomainCustomer]:
        return self.customer_repo.get_all()

    def get_customer(self, customer_id: str) -> Optional[DomainCustomer]:
        return self.customer_repo.get_by_id(customer_id)

    def create_customer(self, raw: Mapping[str, Any]) -> ActionResult:
        validation = validate_customer(raw)
        if not validation.is_valid:
            return ActionResult.failure(
                "Missing Fields. Failed to Add Customer.", validation.field_errors
            )

        record = validation.to_record()
        customer = DomainCustomer(
            name=record.name,
            email=record.email,
            image_url=get_customer_placeholder_image_url(),
        )

        try:
            created = self.customer_repo.create(customer)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to create customer",
                extra={"context": {"error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Add Customer.")

        logger.info("Customer created", extra={"context": {"customer_id": created.id}})
        self.ctx.revalidate(CUSTOMERS_PATH)
        return ActionResult.redirect(CUSTOMERS_PATH)

    def update_customer(self, customer_id: str, raw: Mapping[str, Any]) -> ActionResult:
        validation = validate_customer(raw)
        if not validation.is_valid:
            return ActionResult.failure(
                "Missing Fields. Failed to Update Customer.", validation.field_errors
            )

        record = validation.to_record()
        # The avatar is reset to the placeholder on every save
        customer = DomainCustomer(
            id=customer_id,
            name=record.name,
            email=record.email,
            image_url=get_customer_placeholder_image_url(),
        )

        try:
            self.customer_repo.update(customer)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to update customer",
                extra={"context": {"customer_id": customer_id, "error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Update Customer.")

        logger.info("Customer updated", extra={"context": {"customer_id": customer_id}})
        self.ctx.revalidate(CUSTOMERS_PATH)
        # Invoice rows carry the customer name, email and image
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.redirect(CUSTOMERS_PATH)

    def delete_customer(self, customer_id: str) -> ActionResult:
        """Delete by id.

        A customer that still owns invoices is protected by the foreign key
        and surfaces as the generic delete error.
        """
        try:
            removed = self.customer_repo.delete(customer_id)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to delete customer",
                extra={"context": {"customer_id": customer_id, "error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Delete Customer.")

        logger.info(
            "Customer deleted",
            extra={"context": {"customer_id": customer_id, "removed": removed}},
        )
        self.ctx.revalidate(CUSTOMERS_PATH)
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.confirmed("Deleted Customer.")
