"""Exceptions raised by the formrules engine.

Rule failures are not exceptions: they are recorded as messages on the
field. The errors below signal schema authoring bugs and propagate to the
caller of validate_field / validate_form.
"""


class FormRulesError(Exception):
    """Base class for formrules errors."""
    pass


class UnknownRuleError(FormRulesError, KeyError):
    """A string rule specification names a rule that is not registered."""

    def __init__(self, rule_name: str, available: list[str] | None = None):
        self.rule_name = rule_name
        message = f"Rule '{rule_name}' is not registered."
        if available:
            message += " Available rules: " + ", ".join(available)
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class MissingSiblingFieldError(FormRulesError, KeyError):
    """A cross-field rule references a field that is not in the form."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Field {field_name} not found in form fields.")

    def __str__(self) -> str:
        return self.args[0]
