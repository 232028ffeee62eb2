"""formrules CLI entry point."""

import click

from formrules.config import Settings, configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (defaults to FORMRULES_LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None):
    """formrules — rule-driven form validation CLI."""
    try:
        configure_logging(log_level or Settings.from_env().log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")


# Register subcommands
from formrules.cli.check_cmd import check  # noqa: E402
from formrules.cli.rules_cmd import rules  # noqa: E402
from formrules.cli.schema_cmd import schema  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
cli.add_command(schema)
