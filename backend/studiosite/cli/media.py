"""Flask CLI commands for uploaded media housekeeping."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from studiosite.infra.media.local_media_store import LocalMediaStore
from studiosite.services.media.service import MediaService


@click.group("media")
def media_cli() -> None:
    """Uploaded media maintenance."""


@media_cli.command("prune")
@click.option("--dry-run", is_flag=True, help="List orphaned files without deleting them.")
@with_appcontext
def prune_command(dry_run: bool) -> None:
    """Delete uploads that no post references as its featured image."""
    store = LocalMediaStore(
        root=current_app.config["UPLOAD_FOLDER"],
        url_prefix=current_app.config.get("UPLOAD_URL_PREFIX", "/uploads/"),
    )
    report = MediaService(store=store).prune(dry_run=dry_run)
    if not report.orphans:
        click.echo("No orphaned files.")
        return
    for ref in report.orphans:
        if dry_run:
            click.echo(f"would delete {ref}")
        elif ref in report.deleted:
            click.echo(f"deleted {ref}")
        elif ref in report.failed:
            click.echo(f"failed {ref}", err=True)
    if report.failed:
        raise click.ClickException(f"{len(report.failed)} file(s) could not be deleted.")
