import logging
from urllib.parse import urlsplit

from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from fincontrol.core.limiter_config import limiter
from fincontrol.db.session import SessionLocal
from fincontrol.repositories.user_repo import UserRepository
from fincontrol.services.auth_service import AuthService
from fincontrol.services.context import ActionContext
from fincontrol.services.user_service import UserService

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _is_local_path(target):
    """Only same-site absolute paths; browsers read a backslash as a slash."""
    if not target or "\\" in target or not target.startswith("/"):
        return False
    parts = urlsplit(target)
    return not parts.scheme and not parts.netloc


def _safe_form_values(*fields):
    """Echo submitted values back into the form, never the password."""
    return {name: request.form.get(name, "") for name in fields}


@auth_bp.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute;20 per hour", methods=["POST"])
def login():
    """Email/password sign-in form.

    GET renders the form; POST runs the credential check and either starts a
    session or re-renders with "Invalid credentials" / "Something went wrong".
    """
    if current_user.is_authenticated:
        return redirect(url_for("invoices.list_invoices"))

    if request.method == "GET":
        return render_template("auth/login.html", error=None, form={})

    db = SessionLocal()
    try:
        repo = UserRepository(db)
        user, error = AuthService(repo).authenticate(request.form)
        if error:
            return render_template(
                "auth/login.html", error=error, form=_safe_form_values("email")
            )

        db_user = repo.get_db_by_email(user.email)
        login_user(db_user)
    finally:
        db.close()

    next_url = request.args.get("next")
    if _is_local_path(next_url):
        return redirect(next_url)
    return redirect(url_for("invoices.list_invoices"))


@auth_bp.route("/signup", methods=["GET", "POST"])
@limiter.limit("3 per minute;10 per hour", methods=["POST"])
def signup():
    if current_user.is_authenticated:
        return redirect(url_for("invoices.list_invoices"))

    if request.method == "GET":
        return render_template("auth/signup.html", state={}, form={})

    db = SessionLocal()
    try:
        service = UserService(UserRepository(db), ActionContext(db=db))
        result = service.add_user(request.form)
    finally:
        db.close()

    if result.redirect_to:
        flash("Account created. Please log in.", "success")
        return redirect(result.redirect_to)

    return render_template(
        "auth/signup.html",
        state=result.to_state(),
        form=_safe_form_values("name", "email"),
    )


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logger.info("User signed out", extra={"context": {"user_id": current_user.id}})
    logout_user()
    flash("You have been signed out.", "info")
    return redirect(url_for("auth.login"))
