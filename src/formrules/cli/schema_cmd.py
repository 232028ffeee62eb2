"""Schema CLI commands — validate and list."""

from pathlib import Path

import click

from formrules.config import Settings
from formrules.loader import FormSchemaLoader
from formrules.schema_validator import validate_schema_dir, validate_schema_file


def resolve_schema_dir(schemas: Path | None) -> Path:
    """Explicit --schemas option, else the configured schema directory."""
    if schemas is not None:
        return schemas
    return Settings.from_env().schema_path


schemas_option = click.option(
    "--schemas",
    "schemas",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory of YAML form schemas (defaults to FORMRULES_SCHEMA_PATH or ./forms).",
)


@click.group()
def schema():
    """Form schema commands."""
    pass


@schema.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate a single YAML file instead of the whole schema directory.",
)
@schemas_option
def validate(strict: bool, target_path: Path | None, schemas: Path | None):
    """Validate form schema files (structure and rule references)."""
    if target_path is not None:
        issues = validate_schema_file(target_path)
        if strict:
            for issue in issues:
                issue.severity = "error"
    else:
        schema_dir = resolve_schema_dir(schemas)
        if not schema_dir.exists():
            click.echo(f"Error: Schema directory not found at {schema_dir}", err=True)
            raise SystemExit(1)
        issues = validate_schema_dir(schema_dir, strict=strict)

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    click.echo(click.style("All form schemas are valid.", fg="green", bold=True))


@schema.command("list")
@schemas_option
def list_cmd(schemas: Path | None):
    """List the forms declared in the schema directory."""
    schema_dir = resolve_schema_dir(schemas)
    loader = FormSchemaLoader(schema_dir)
    try:
        loader.load_all()
    except ValueError as e:
        click.echo(click.style(f"Failed to load schemas: {e}", fg="red"), err=True)
        raise SystemExit(1)

    names = loader.list_schemas()
    if not names:
        click.echo(f"No form schemas found in {schema_dir}")
        return

    click.echo(f"Loaded {len(names)} form(s):")
    for name in names:
        form_schema = loader.get_schema(name)
        field_count = len(form_schema.fields) if form_schema else 0
        click.echo(f"  ✓ {name} ({field_count} fields)")
