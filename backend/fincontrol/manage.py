"""Management commands for the Financial Control backend."""

from __future__ import annotations

import logging

import click

from fincontrol.db.session import SessionLocal, create_tables
from fincontrol.repositories.user_repo import UserRepository
from fincontrol.services.context import ActionContext
from fincontrol.services.user_service import UserService

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init_db")
def init_db() -> None:
    """Create any missing tables in the configured database."""
    create_tables()
    logging.info("Database tables are in place.")


@cli.command("create_user")
@click.option("--name", required=True, help="Display name of the staff member.")
@click.option("--email", required=True, help="Login email; must be unique.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Login password (prompted when omitted).",
)
def create_user(name: str, email: str, password: str) -> None:
    """Create a staff account with the same rules as the sign-up form."""
    create_tables()

    session = SessionLocal()
    try:
        service = UserService(UserRepository(session), ActionContext(db=session))
        result = service.add_user({"name": name, "email": email, "password": password})
    finally:
        session.close()

    if not result.success:
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in result.errors.items()
        )
        raise click.ClickException(
            f"{result.message} {details}".strip() if details else result.message
        )

    logging.info("Created user %s.", email)


if __name__ == "__main__":
    cli()
