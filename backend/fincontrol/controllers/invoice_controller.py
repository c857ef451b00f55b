"""
Invoice pages: listing, create/edit forms and delete.

Each handler opens its own session, builds an ``ActionContext`` and closes
the session in ``finally``. Form handlers either follow the service's
redirect or re-render the form with the returned state.
"""

import logging

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from fincontrol.core.config import INVOICES_PATH
from fincontrol.core.revalidation import listing_cache
from fincontrol.core.validation import INVOICE_STATUSES
from fincontrol.db.session import SessionLocal
from fincontrol.repositories.customer_repo import CustomerRepository
from fincontrol.repositories.invoice_repo import InvoiceRepository
from fincontrol.services.context import ActionContext
from fincontrol.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)

invoices_bp = Blueprint("invoices", __name__, url_prefix=INVOICES_PATH)


def _invoice_service(db) -> InvoiceService:
    return InvoiceService(InvoiceRepository(db), ActionContext(db=db))


def _render_form(db, title, action, form, state, invoice_id=None):
    customers = CustomerRepository(db).get_all()
    return render_template(
        "invoices/form.html",
        title=title,
        action=action,
        customers=customers,
        statuses=INVOICE_STATUSES,
        form=form,
        state=state,
        invoice_id=invoice_id,
    )


@invoices_bp.route("", methods=["GET"])
@login_required
def list_invoices():
    db = SessionLocal()
    try:
        service = _invoice_service(db)
        invoices = listing_cache.get_or_load(INVOICES_PATH, service.list_invoices)
        return render_template("invoices/list.html", invoices=invoices)
    finally:
        db.close()


@invoices_bp.route("/create", methods=["GET", "POST"])
@login_required
def create_invoice():
    db = SessionLocal()
    try:
        action = url_for("invoices.create_invoice")
        if request.method == "GET":
            return _render_form(db, "Create Invoice", action, form={}, state={})

        result = _invoice_service(db).create_invoice(request.form)
        if result.redirect_to:
            flash("Invoice created.", "success")
            return redirect(result.redirect_to)

        return _render_form(
            db, "Create Invoice", action, form=request.form, state=result.to_state()
        )
    finally:
        db.close()


@invoices_bp.route("/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice(invoice_id):
    db = SessionLocal()
    try:
        service = _invoice_service(db)
        action = url_for("invoices.edit_invoice", invoice_id=invoice_id)

        if request.method == "GET":
            invoice = service.get_invoice(invoice_id)
            if invoice is None:
                abort(404)
            form = {
                "customerId": invoice.customer_id,
                "amount": f"{invoice.amount_major:.2f}",
                "status": invoice.status,
            }
            return _render_form(
                db, "Edit Invoice", action, form=form, state={}, invoice_id=invoice_id
            )

        result = service.update_invoice(invoice_id, request.form)
        if result.redirect_to:
            flash("Invoice updated.", "success")
            return redirect(result.redirect_to)

        return _render_form(
            db,
            "Edit Invoice",
            action,
            form=request.form,
            state=result.to_state(),
            invoice_id=invoice_id,
        )
    finally:
        db.close()


@invoices_bp.route("/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice(invoice_id):
    db = SessionLocal()
    try:
        result = _invoice_service(db).delete_invoice(invoice_id)
    finally:
        db.close()

    flash(result.message, "success" if result.success else "error")
    return redirect(url_for("invoices.list_invoices"))
