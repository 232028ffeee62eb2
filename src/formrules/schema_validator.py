"""
schema_validator.py — checks for YAML form schema files.

Two passes per file:
- Structural: the document is validated against the bundled JSON Schema
  (``schemas/form.schema.json``).
- Semantic: every rule names a registered rule, cross-field rules point at a
  field of the same form, and parameterised rules carry enough arguments.

Usage:
    from formrules.schema_validator import validate_schema_dir

    issues = validate_schema_dir(Path("forms"))
    for issue in issues:
        print(issue)

The engine itself does not use these checks: an unknown rule still only
fails when the field carrying it is validated.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from formrules.loader import SCHEMA_SUFFIXES
from formrules.parser import parse_rule_name
from formrules.registry import RuleRegistry, default_registry

logger = logging.getLogger(__name__)

_SCHEMA_FILE = Path(__file__).parent / "schemas" / "form.schema.json"

# Rules that look up a sibling field named by their first argument
CROSS_FIELD_RULES = frozenset({"exact", "different"})

# Minimum number of arguments each parameterised built-in rule needs
REQUIRED_ARGS: dict[str, int] = {
    "arrayContains": 1,
    "arrayDoesntContain": 1,
    "dateAfter": 1,
    "dateBefore": 1,
    "dateBetween": 2,
    "dateExact": 1,
    "dateFormat": 1,
    "different": 1,
    "exact": 1,
    "filesLength": 1,
    "filesMax": 1,
    "filesMin": 1,
    "numberBetween": 2,
    "numberExact": 1,
    "numberMax": 1,
    "numberMin": 1,
    "stringLength": 1,
    "stringMax": 1,
    "stringMin": 1,
}


@dataclass
class SchemaIssue:
    """A single finding for a form schema file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "fields/email/rules[1]"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_json_schema() -> dict[str, Any]:
    with _SCHEMA_FILE.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def check_rules(
    doc: dict[str, Any],
    file: Path,
    registry: RuleRegistry | None = None,
) -> list[SchemaIssue]:
    """Semantic checks on the rule lists of an already well-formed document."""
    registry = registry if registry is not None else default_registry()
    fields = doc.get("fields") or {}
    issues: list[SchemaIssue] = []

    for field_name, descriptor in fields.items():
        rules = (descriptor or {}).get("rules") or []
        for index, entry in enumerate(rules):
            if not isinstance(entry, str):
                continue
            location = f"fields/{field_name}/rules[{index}]"
            spec = parse_rule_name(entry)

            if not registry.is_registered(spec.name):
                issues.append(SchemaIssue(file, f"Unknown rule '{spec.name}'", location))
                continue

            needed = REQUIRED_ARGS.get(spec.name, 0)
            if len(spec.args) < needed:
                issues.append(
                    SchemaIssue(
                        file,
                        f"Rule '{spec.name}' expects {needed} argument(s), got {len(spec.args)}",
                        location,
                        severity="warning",
                    )
                )

            if spec.name in CROSS_FIELD_RULES and spec.args and spec.args[0] not in fields:
                issues.append(
                    SchemaIssue(
                        file,
                        f"Rule '{spec.name}' references unknown field '{spec.args[0]}'",
                        location,
                    )
                )

    return issues


def validate_schema_file(
    yaml_path: Path,
    *,
    registry: RuleRegistry | None = None,
) -> list[SchemaIssue]:
    """
    Validate a single YAML form schema.

    Args:
        yaml_path: Path to the YAML file to validate.
        registry:  Rule registry used for the semantic pass (built-ins by default).

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [SchemaIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [SchemaIssue(file=yaml_path, message="File is empty or contains only whitespace")]

    validator = Draft202012Validator(_load_json_schema())
    issues = [
        SchemaIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: list(e.path))
    ]
    if issues:
        # Rule checks assume the document shape is valid
        return issues

    return check_rules(doc, yaml_path, registry)


def validate_schema_dir(
    schema_dir: Path,
    *,
    strict: bool = False,
    registry: RuleRegistry | None = None,
) -> list[SchemaIssue]:
    """
    Validate every ``*.yaml`` / ``*.yml`` file under *schema_dir*.

    Args:
        schema_dir: Directory holding form schemas.
        strict:     If ``True``, warnings are escalated to errors.
        registry:   Rule registry used for the semantic pass.

    Returns:
        A flat list of :class:`SchemaIssue` objects across all files.
    """
    if not schema_dir.is_dir():
        return [
            SchemaIssue(
                file=schema_dir,
                message=f"Schema directory does not exist: {schema_dir}",
            )
        ]

    all_issues: list[SchemaIssue] = []
    files = sorted(
        p for p in schema_dir.rglob("*") if p.is_file() and p.suffix in SCHEMA_SUFFIXES
    )
    for yaml_file in files:
        issues = validate_schema_file(yaml_file, registry=registry)
        logger.debug("Validated %s: %d issue(s)", yaml_file, len(issues))
        all_issues.extend(issues)

    if strict:
        for issue in all_issues:
            issue.severity = "error"

    return all_issues
