"""Check command — validate a set of values against a declared form."""

import json
from pathlib import Path

import click
import yaml

from formrules.cli.schema_cmd import resolve_schema_dir, schemas_option
from formrules.engine import ValidationEngine
from formrules.errors import FormRulesError
from formrules.loader import FormSchemaLoader


def _load_values(path: Path) -> dict:
    with path.open() as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.BadParameter(
            f"{path} must contain a mapping of field name to value", param_hint="--data"
        )
    return data


@click.command()
@click.argument("form_name")
@click.option(
    "--data",
    "data_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file mapping field names to values.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print errors as JSON.")
@schemas_option
def check(form_name: str, data_path: Path, as_json: bool, schemas: Path | None):
    """Validate the values in --data against FORM_NAME."""
    schema_dir = resolve_schema_dir(schemas)
    loader = FormSchemaLoader(schema_dir)
    try:
        loader.load_all()
        form = loader.build_form(form_name)
    except (KeyError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    values = _load_values(data_path)
    for name, value in values.items():
        if name not in form:
            click.echo(click.style(f"Ignoring unknown field '{name}'", fg="yellow"), err=True)
            continue
        form.field(name).value = value

    engine = ValidationEngine()
    try:
        is_valid = engine.validate_form(form)
    except FormRulesError as e:
        click.echo(click.style(f"Schema error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    errors = engine.collect_errors(form)
    if as_json:
        click.echo(json.dumps({"valid": is_valid, "errors": errors}, indent=2))
    else:
        for field in form.get_fields():
            messages = errors.get(field.name)
            if not messages:
                click.echo(click.style(f"  ✓ {field.name}", fg="green"))
                continue
            click.echo(click.style(f"  ✗ {field.name}", fg="red"))
            for message in messages:
                click.echo(f"      - {message}")

        if is_valid:
            click.echo(click.style(f"\nForm '{form_name}' is valid.", fg="green", bold=True))
        else:
            click.echo(
                click.style(
                    f"\nForm '{form_name}' is invalid: {len(errors)} field(s) with errors.",
                    fg="red",
                    bold=True,
                )
            )

    if not is_valid:
        raise SystemExit(1)
