"""Flask CLI commands for provisioning users and demo content."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from studiosite.core.extensions import db
from studiosite.models.user import ROLE_ADMIN
from studiosite.seeds import seed_data
from studiosite.services._shared.errors import ServiceError
from studiosite.services.identity.dto import UserCreateIn, UserUpdateIn
from studiosite.services.identity.service import IdentityService

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _is_production() -> bool:
    return str(current_app.config.get("ENV_NAME", "")).lower() == "production"


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Provision users and sample content."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("admin")
@click.option("--email", required=True, help="Admin login email.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Admin password (prompted when omitted).",
)
@click.option("--name", default="Administrator", show_default=True, help="Display name.")
@click.option("--force", is_flag=True, help="Allow running against production.")
@with_appcontext
def admin_command(email: str, password: str, name: str, force: bool) -> None:
    """Create an admin user, or reset the password of an existing one."""
    if _is_production() and not force:
        raise click.UsageError("Refusing to provision users in production without --force.")
    if len(password) < 8:
        raise click.BadParameter("must be at least 8 characters", param_hint="--password")

    service = IdentityService()
    try:
        existing = service.find_by_email(email)
        if existing is None:
            user = service.create(
                UserCreateIn(email=email, password=password, name=name, role=ROLE_ADMIN)
            )
            click.echo(f"Created admin {user.email} (id={user.id}).")
        else:
            user = service.update(
                existing.id, UserUpdateIn(password=password, name=name, role=ROLE_ADMIN)
            )
            click.echo(f"Reset admin {user.email} (id={user.id}).")
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc


@seed_cli.command("demo")
@click.option("--author-email", default=None, help="Attribute posts to this user.")
@click.pass_context
@with_appcontext
def demo_command(ctx: click.Context, author_email: str | None) -> None:
    """Insert sample posts, categories, tags and comments (idempotent)."""
    verbose = bool(ctx.obj.get("verbose", False))
    author_id = None
    if author_email:
        author = IdentityService().find_by_email(author_email)
        if author is None:
            raise click.BadParameter(f"no user with email {author_email}", param_hint="--author-email")
        author_id = author.id
    try:
        summary = seed_data.run_all(db, author_id=author_id, verbose=verbose)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)
