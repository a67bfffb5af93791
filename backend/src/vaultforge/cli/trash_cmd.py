"""Trash CLI commands - list and purge soft-deleted objects."""

import click

from vaultforge.vault import initialize


@click.group()
def trash():
    """Soft-deleted object commands."""
    pass


@trash.command("list")
@click.pass_context
def list_deleted(ctx: click.Context):
    """List soft-deleted objects of every user."""
    from vaultforge.cli.main import engine_from_context

    vault = initialize(engine_from_context(ctx))
    total = 0
    for service in vault.services():
        for obj in service.find_deleted():
            click.echo(f"{service.object_type:<20} {obj.uuid}  user={obj.user_id}")
            total += 1
    click.echo(f"{total} deleted object(s).")


@trash.command()
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_context
def purge(ctx: click.Context, yes: bool):
    """Destroy every soft-deleted object permanently."""
    from vaultforge.cli.main import engine_from_context

    if not yes:
        click.confirm("Permanently destroy all deleted objects?", abort=True)

    vault = initialize(engine_from_context(ctx))
    count = vault.purge_deleted()
    click.echo(click.style(f"Destroyed {count} object(s).", fg="green"))
