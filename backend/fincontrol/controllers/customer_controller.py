import logging

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from fincontrol.core.config import CUSTOMERS_PATH
from fincontrol.core.revalidation import listing_cache
from fincontrol.db.session import SessionLocal
from fincontrol.repositories.customer_repo import CustomerRepository
from fincontrol.services.context import ActionContext
from fincontrol.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

customers_bp = Blueprint("customers", __name__, url_prefix=CUSTOMERS_PATH)


def _customer_service(db) -> CustomerService:
    return CustomerService(CustomerRepository(db), ActionContext(db=db))


@customers_bp.route("", methods=["GET"])
@login_required
def list_customers():
    db = SessionLocal()
    try:
        service = _customer_service(db)
        customers = listing_cache.get_or_load(CUSTOMERS_PATH, service.list_customers)
        return render_template("customers/list.html", customers=customers)
    finally:
        db.close()


@customers_bp.route("/create", methods=["GET", "POST"])
@login_required
def create_customer():
    action = url_for("customers.create_customer")
    if request.method == "GET":
        return render_template(
            "customers/form.html", title="Add Customer", action=action, form={}, state={}
        )

    db = SessionLocal()
    try:
        result = _customer_service(db).create_customer(request.form)
    finally:
        db.close()

    if result.redirect_to:
        flash("Customer added.", "success")
        return redirect(result.redirect_to)

    return render_template(
        "customers/form.html",
        title="Add Customer",
        action=action,
        form=request.form,
        state=result.to_state(),
    )


@customers_bp.route("/<customer_id>/edit", methods=["GET", "POST"])
@login_required
def edit_customer(customer_id):
    action = url_for("customers.edit_customer", customer_id=customer_id)

    db = SessionLocal()
    try:
        service = _customer_service(db)
        if request.method == "GET":
            customer = service.get_customer(customer_id)
            if customer is None:
                abort(404)
            return render_template(
                "customers/form.html",
                title="Edit Customer",
                action=action,
                form={"name": customer.name, "email": customer.email},
                state={},
                customer_id=customer_id,
            )

        result = service.update_customer(customer_id, request.form)
    finally:
        db.close()

    if result.redirect_to:
        flash("Customer updated.", "success")
        return redirect(result.redirect_to)

    return render_template(
        "customers/form.html",
        title="Edit Customer",
        action=action,
        form=request.form,
        state=result.to_state(),
        customer_id=customer_id,
    )


@customers_bp.route("/<customer_id>/delete", methods=["POST"])
@login_required
def delete_customer(customer_id):
    db = SessionLocal()
    try:
        result = _customer_service(db).delete_customer(customer_id)
    finally:
        db.close()

    flash(result.message, "success" if result.success else "error")
    return redirect(url_for("customers.list_customers"))
