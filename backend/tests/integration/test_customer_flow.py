"""Integration tests for the customer pages."""

from datetime import date

import pytest
from sqlalchemy import select

from fincontrol.db.base import Customer as DbCustomer
from fincontrol.db.base import Invoice as DbInvoice


def _customers(db_session):
    db_session.expire_all()
    return db_session.scalars(select(DbCustomer)).all()


@pytest.mark.customer
class TestCustomerFlow:
    def test_create_customer_with_placeholder_image(self, auth_client, db_session):
        response = auth_client.post(
            "/dashboard/customers/create",
            data={"name": "Hector Simpson", "email": "hector@simpson.com"},
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard/customers")
        [row] = _customers(db_session)
        assert row.name == "Hector Simpson"
        assert row.image_url == "/static/customers/placeholder.svg"

    def test_empty_name_rejected_without_row(self, auth_client, db_session):
        response = auth_client.post(
            "/dashboard/customers/create", data={"name": "", "email": "a@b.com"}
        )

        body = response.get_data(as_text=True)
        assert "Missing Fields. Failed to Add Customer." in body
        assert "This field has to be filled." in body
        assert _customers(db_session) == []

    def test_edit_updates_fields(self, auth_client, db_session, customer):
        response = auth_client.post(
            f"/dashboard/customers/{customer.id}/edit",
            data={"name": "Renamed", "email": "renamed@example.com"},
        )

        assert response.status_code == 302
        [row] = _customers(db_session)
        assert (row.name, row.email) == ("Renamed", "renamed@example.com")

    def test_edit_missing_customer_is_404(self, auth_client):
        response = auth_client.get("/dashboard/customers/missing/edit")

        assert response.status_code == 404
        assert "Could not find the requested record." in response.get_data(as_text=True)

    def test_delete_customer(self, auth_client, db_session, customer):
        response = auth_client.post(
            f"/dashboard/customers/{customer.id}/delete", follow_redirects=True
        )

        assert "Deleted Customer." in response.get_data(as_text=True)
        assert _customers(db_session) == []

    def test_delete_customer_with_invoices_fails(self, auth_client, db_session, customer):
        db_session.add(
            DbInvoice(customer_id=customer.id, amount=100, status="paid", date=date(2024, 1, 1))
        )
        db_session.commit()

        response = auth_client.post(
            f"/dashboard/customers/{customer.id}/delete", follow_redirects=True
        )

        assert "Database Error: Failed to Delete Customer." in response.get_data(as_text=True)
        assert len(_customers(db_session)) == 1

    def test_listing_shows_customers(self, auth_client, customer):
        body = auth_client.get("/dashboard/customers").get_data(as_text=True)

        assert customer.name in body
        assert customer.email in body
