"""Load form schemas from YAML files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formrules.form import Form
from formrules.types import FieldSpec

SCHEMA_SUFFIXES = (".yaml", ".yml")


@dataclass
class FormSchema:
    """A named form declaration.

    Attributes:
        name: Form name, unique across the schema directory
        fields: Field descriptors in declaration order
        extra: Initial status properties for the form
        source: File the schema was loaded from, if any
    """

    name: str
    fields: dict[str, FieldSpec] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> "FormSchema":
        """Create a FormSchema from a parsed YAML/JSON document."""
        name = data.get("form")
        if not name:
            where = f" {source}" if source else ""
            raise ValueError(f"Form schema{where} has no 'form' name")

        raw_fields = data.get("fields") or {}
        if not isinstance(raw_fields, dict):
            raise ValueError(f"Form '{name}': 'fields' must be a mapping of field name to descriptor")

        return cls(
            name=str(name),
            fields={
                str(field_name): FieldSpec.from_value(descriptor)
                for field_name, descriptor in raw_fields.items()
            },
            extra=dict(data.get("extra") or {}),
            source=source,
        )

    def build_form(self) -> Form:
        """Construct a fresh Form from this schema."""
        return Form.from_schema(self.fields, self.extra)


def load_schema_file(path: Path) -> FormSchema:
    """Load a single YAML form schema.

    Raises:
        ValueError: If the file is empty or malformed
    """
    with path.open() as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Form schema {path} must contain a mapping")
    return FormSchema.from_dict(data, source=path)


class FormSchemaLoader:
    """Loads form schemas from a directory of YAML files."""

    def __init__(self, schema_path: Path):
        self.schema_path = schema_path
        self.schemas: dict[str, FormSchema] = {}

    def schema_files(self) -> list[Path]:
        if not self.schema_path.is_dir():
            return []
        return sorted(
            p for p in self.schema_path.rglob("*")
            if p.is_file() and p.suffix in SCHEMA_SUFFIXES
        )

    def load_all(self) -> dict[str, FormSchema]:
        """Load every schema file under the directory.

        Raises:
            ValueError: On malformed files or duplicate form names
        """
        self.schemas = {}
        for path in self.schema_files():
            schema = load_schema_file(path)
            if schema.name in self.schemas:
                existing = self.schemas[schema.name].source
                raise ValueError(
                    f"Form '{schema.name}' is declared in both {existing} and {path}"
                )
            self.schemas[schema.name] = schema
        return self.schemas

    def get_schema(self, name: str) -> FormSchema | None:
        return self.schemas.get(name)

    def list_schemas(self) -> list[str]:
        return sorted(self.schemas)

    def build_form(self, name: str) -> Form:
        """Build a fresh form from a loaded schema (KeyError if unknown)."""
        schema = self.schemas.get(name)
        if schema is None:
            raise KeyError(f"Form '{name}' not found in {self.schema_path}")
        return schema.build_form()
