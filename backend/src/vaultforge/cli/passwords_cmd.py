"""Password CLI commands."""

import click

from vaultforge.services.identity import UserContext
from vaultforge.vault import Vault, initialize


@click.group()
def passwords():
    """Password commands."""
    pass


@passwords.command("list")
@click.option("--user", "user_id", required=True, help="Owning user id.")
@click.option("--folder", default=None, help="Only passwords in this folder.")
@click.option("--tag", default=None, help="Only passwords with this tag.")
@click.option("--include-hidden", is_flag=True, default=False, help="Include hidden tag links.")
@click.pass_context
def list_passwords(
    ctx: click.Context,
    user_id: str,
    folder: str | None,
    tag: str | None,
    include_hidden: bool,
):
    """List live passwords of a user."""
    from vaultforge.cli.main import engine_from_context

    if folder and tag:
        raise click.UsageError("--folder and --tag are mutually exclusive.")

    engine = engine_from_context(ctx)
    initialize(engine)
    vault = Vault(engine, UserContext(user_id=user_id))

    if folder:
        found = vault.passwords.get_by_folder(folder)
    elif tag:
        found = vault.passwords.get_by_tag(tag, include_hidden)
    else:
        found = [p for p in vault.passwords.find_all() if not p.deleted]

    for password in found:
        revision = vault.current_revision(password)
        click.echo(f"{password.uuid}  {revision.label}")
    click.echo(f"{len(found)} password(s).")
