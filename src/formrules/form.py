"""Field and form model.

A Form owns its Fields, keyed by name in declaration order. It keeps a copy
of the schema it was built from so that ``reset()`` always returns to the
original state, regardless of later mutations of values or flags. Starting
values that cannot be copied, such as open files, are shared with the schema.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

from formrules.rules.coercion import as_text
from formrules.types import FORM_PROPERTIES, ErrorKey, FieldSpec, RuleEntry


@dataclass
class Field:
    """Per-field state.

    Attributes:
        name: Field name, unique within its form
        value: Current value, set by the owner or UI
        rules: Ordered rule entries evaluated by the engine
        errors: Local rule failures, keyed by rule name (or index for inline rules)
        server_errors: Externally supplied messages, set via set_form_errors
    """

    name: str
    value: Any = ""
    rules: list[RuleEntry] = field(default_factory=lambda: ["required"])
    errors: dict[ErrorKey, str] = field(default_factory=dict)
    server_errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors) or bool(self.server_errors)

    @classmethod
    def from_spec(cls, name: str, spec: FieldSpec) -> "Field":
        return cls(name=name, value=_copy_value(spec.value), rules=list(spec.rules))


@dataclass
class Form:
    """A named collection of fields plus status flags.

    ``valid`` only reflects the most recent ``validate_form`` run; it is not
    recomputed when a single field is revalidated.
    """

    fields: dict[str, Field] = field(default_factory=dict)
    error: str | None = None
    success: str | None = None
    loading: bool = False
    touched: bool = False
    valid: bool = False
    extra: dict[str, Any] = field(default_factory=dict)
    _base_fields: dict[str, FieldSpec] = field(default_factory=dict, repr=False)
    _base_extra: dict[str, Any] = field(default_factory=dict, repr=False)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    @classmethod
    def from_schema(
        cls,
        schema: Mapping[str, Any],
        extra: Mapping[str, Any] | None = None,
    ) -> "Form":
        """Build a form from a ``{name: {value?, rules?}}`` mapping.

        Args:
            schema: Field descriptors keyed by field name (declaration order is kept)
            extra: Initial status properties merged over the defaults

        Returns:
            A fresh, unvalidated Form
        """
        specs = {name: FieldSpec.from_value(data) for name, data in schema.items()}
        form = cls(
            _base_fields={name: _copy_spec(spec) for name, spec in specs.items()},
            _base_extra=_copy_extra(extra or {}),
        )
        form._initialise()
        return form

    def _initialise(self) -> None:
        self.fields = {
            name: Field.from_spec(name, spec)
            for name, spec in self._base_fields.items()
        }
        self.error = None
        self.success = None
        self.loading = False
        self.touched = False
        self.valid = False
        self.extra = {}
        self.update(**_copy_extra(self._base_extra))

    def reset(self) -> None:
        """Rebuild every field and flag from the schema captured at construction."""
        with self.lock:
            self._initialise()

    def update(self, **properties: Any) -> None:
        """Set status flags; keys that are not status flags land in ``extra``."""
        for key, value in properties.items():
            if key in FORM_PROPERTIES:
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def field(self, name: str) -> Field:
        """Get a field by name (KeyError if absent)."""
        return self.fields[name]

    def get_fields(self) -> list[Field]:
        """All fields in declaration order."""
        return list(self.fields.values())

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    # -------------------------------------------------------------------------
    # Data projection
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Raw field values keyed by field name."""
        return {name: f.value for name, f in self.fields.items()}

    def to_form_data(self) -> list[tuple[str, str]]:
        """Field values as ``(name, text)`` pairs for a multipart/form payload."""
        return [(name, as_text(f.value) or "") for name, f in self.fields.items()]


def _copy_value(value: Any) -> Any:
    """Independent copy of a starting value.

    Values that cannot be deep-copied (open files, or lists of them) are
    copied shallowly, or shared when even that fails.
    """
    try:
        return copy.deepcopy(value)
    except TypeError:
        pass
    try:
        return copy.copy(value)
    except TypeError:
        return value


def _copy_spec(spec: FieldSpec) -> FieldSpec:
    # Rule entries are strings or frozen Rules, so a new list is enough
    return FieldSpec(value=_copy_value(spec.value), rules=list(spec.rules))


def _copy_extra(extra: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _copy_value(value) for key, value in extra.items()}
