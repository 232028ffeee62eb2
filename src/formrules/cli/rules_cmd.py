"""Rule catalog command."""

import click

from formrules.registry import default_registry


@click.command()
def rules():
    """List every registered rule name."""
    registry = default_registry()
    for name in registry.list_registered():
        click.echo(name)
    click.echo(f"\n{len(registry)} rule(s) registered.")
