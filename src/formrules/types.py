"""Core types for the formrules validation engine.

This module defines the foundational types shared by the registry, the
rule specification parser, the form model and the engine:
- Rule: a pure predicate/message pair
- FieldSpec: the declarative descriptor a field is built from
- Type aliases for rule entries, server errors and callbacks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from formrules.form import Field, Form


RuleTest = Callable[["Field", list[str], "Form"], bool]
RuleMessage = Callable[["Field", list[str], "Form"], str]

# Error keys are rule names for registry rules and list positions for inline rules
ErrorKey = Union[str, int]

# Server-side errors keyed by field name
ServerErrors = dict[str, list[str]]

ValidationCallback = Callable[[bool], None]

# Status flags a form carries besides its fields
FORM_PROPERTIES = ("error", "loading", "success", "touched", "valid")


@dataclass(frozen=True)
class Rule:
    """A named, stateless validation rule.

    Rules must be deterministic and side-effect free: ``test`` may read the
    value of sibling fields through the form, but never mutates any field.

    Attributes:
        test: Returns True when the field's value satisfies the rule
        message: Builds the error message, interpolating the rule arguments
        name: Registry name, or None for inline rules
    """

    test: RuleTest
    message: RuleMessage
    name: str | None = None


# A field's rule list holds "name:arg1,arg2" strings or inline Rule objects
RuleEntry = Union[str, Rule]


def _default_rules() -> list[RuleEntry]:
    return ["required"]


@dataclass
class FieldSpec:
    """Declarative description of a field, as supplied when building a form.

    Attributes:
        value: Initial value (defaults to empty string)
        rules: Ordered rule entries (defaults to ["required"])
    """

    value: Any = ""
    rules: list[RuleEntry] = field(default_factory=_default_rules)

    @classmethod
    def from_value(cls, data: Any) -> "FieldSpec":
        """Normalise a schema entry into a FieldSpec.

        Accepts an existing FieldSpec, a ``{value?, rules?}`` mapping, or None
        (all defaults). An explicit empty rule list is kept as-is.
        """
        if isinstance(data, FieldSpec):
            return cls(value=data.value, rules=list(data.rules))
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"Field descriptor must be a mapping with 'value' and/or 'rules', got {data!r}"
            )

        value = data.get("value")
        rules = data.get("rules")
        if isinstance(rules, str):
            rules = [rules]

        return cls(
            value=value if value is not None else "",
            rules=list(rules) if rules is not None else _default_rules(),
        )
