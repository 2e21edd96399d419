"""Command line interface for vaultsync."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from vaultsync.errors import VaultSyncError
from vaultsync.manager import VaultSyncManager
from vaultsync.store import JsonStore
from vaultsync.sync import DEFAULT_ROOT_FOLDER_NAME, SyncOptions
from vaultsync.util.time import format_millis


@click.group()
@click.option(
    "--state-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding settings.json and file_ids.json (default: ~/.config/vaultsync).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, state_dir: Optional[Path], verbose: bool) -> None:
    """Upload an Obsidian vault to Google Drive, incrementally."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["state_dir"] = state_dir


@main.command()
@click.argument("vault_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--root-name", default=DEFAULT_ROOT_FOLDER_NAME, show_default=True,
              help="Name of the remote folder that mirrors the vault root.")
@click.option("--root-parent-id", default=None, help="Remote folder id to create the root folder in.")
@click.option("--include-hidden", is_flag=True, help="Also upload dot-files and dot-folders.")
@click.pass_context
def sync(
    ctx: click.Context,
    vault_dir: Path,
    root_name: str,
    root_parent_id: Optional[str],
    include_hidden: bool,
) -> None:
    """Run one sync pass for VAULT_DIR."""
    try:
        options = SyncOptions(root_folder_name=root_name, root_parent_id=root_parent_id)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    manager = VaultSyncManager(
        vault_dir,
        state_dir=ctx.obj["state_dir"],
        options=options,
        include_hidden=include_hidden,
    )
    try:
        result = manager.sync()
    except VaultSyncError as exc:
        click.echo(f"Error during sync: {exc}", err=True)
        ctx.exit(1)

    click.echo(result.message)
    summary = result.summary()
    click.echo(
        "created={created} updated={updated} skipped={skipped} "
        "failed={failed} folders_created={folders_created}".format(**summary)
    )
    for item in result.errors:
        click.echo(f"  {item.kind} {item.path}: {item.error_type}: {item.error_message}", err=True)
    if result.fatal_error:
        click.echo(result.fatal_error, err=True)
    if result.status != "success":
        ctx.exit(1)


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the last sync time and tracked files."""
    store = JsonStore(ctx.obj["state_dir"])
    try:
        settings = store.load_settings()
        file_ids = store.load_file_ids()
    except VaultSyncError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

    click.echo(f"Logged in: {'yes' if settings.has_credentials else 'no'}")
    click.echo(f"Last sync: {format_millis(settings.last_sync_timestamp)}")
    click.echo(f"Tracked files: {len(file_ids)}")
    click.echo(f"Pending retries: {len(settings.pending_paths)}")
    for path in sorted(settings.pending_paths):
        click.echo(f"  {path}")


@main.command()
@click.option("--client-id", default=None, help="OAuth client id.")
@click.option("--client-secret", default=None, help="OAuth client secret.")
@click.option("--refresh-token", default=None, help="OAuth refresh token obtained beforehand.")
@click.pass_context
def configure(
    ctx: click.Context,
    client_id: Optional[str],
    client_secret: Optional[str],
    refresh_token: Optional[str],
) -> None:
    """Store OAuth client credentials and refresh token."""
    store = JsonStore(ctx.obj["state_dir"])
    settings = store.load_settings()
    if client_id is not None:
        settings.client_id = client_id
    if client_secret is not None:
        settings.client_secret = client_secret
    if refresh_token is not None:
        settings.refresh_token = refresh_token
    store.save_settings(settings)
    click.echo(f"Saved settings to {store.settings_file}")


if __name__ == "__main__":
    main()
