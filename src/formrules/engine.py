"""Validation engine for formrules.

The engine applies a field's rules in declared order, records every failure
on the field, and rolls field results up into form validity. It also merges
externally supplied (server) errors into the same display surface.

All rules run on every pass; a failing rule never stops the ones after it.
UnknownRuleError and MissingSiblingFieldError are not caught here and
propagate to the caller.
"""

import logging
from typing import Mapping

from formrules.form import Field, Form
from formrules.parser import parse_rule_spec
from formrules.registry import RuleRegistry, default_registry
from formrules.types import ErrorKey, ValidationCallback

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Runs rules against fields and forms.

    Example:
        engine = ValidationEngine()
        form = Form.from_schema({"email": {"rules": ["required", "email"]}})
        form.field("email").value = "not-an-email"
        engine.validate_form(form)        # False
        engine.get_field_errors(form.field("email"))
        # ["this field has to be a valid email address."]
    """

    def __init__(self, registry: RuleRegistry | None = None):
        self.registry = registry if registry is not None else default_registry()

    def validate_field(self, field: Field, form: Form) -> bool:
        """Validate one field against all of its rules.

        Clears both the local and the server errors first, then records one
        message per failing rule.

        Args:
            field: The field to validate
            form: The owning form (used by cross-field rules)

        Returns:
            True if every rule passed
        """
        with form.lock:
            field.errors = {}
            field.server_errors = []
            is_valid = True

            for index, entry in enumerate(field.rules):
                rule = parse_rule_spec(entry).resolve(self.registry, index)
                if rule.test(field, rule.args, form):
                    continue

                field.errors[rule.error_key] = rule.message(field, rule.args, form)
                is_valid = False
                logger.debug(
                    "Field '%s' failed rule '%s'", field.name, rule.error_key
                )

            return is_valid

    def validate_form(
        self,
        form: Form,
        callback: ValidationCallback | None = None,
    ) -> bool:
        """Validate every field in declaration order and update ``form.valid``.

        Args:
            form: The form to validate
            callback: Called with the result once validation completes

        Returns:
            True if every field is valid
        """
        with form.lock:
            is_valid = True
            form.valid = True

            for field in form.get_fields():
                if not self.validate_field(field, form):
                    is_valid = False

            form.valid = is_valid

        logger.debug(
            "Validated %d field(s): %s",
            len(form.fields),
            "valid" if is_valid else "invalid",
        )

        if callback is not None:
            callback(is_valid)

        return is_valid

    def on_value_change(self, field: Field, form: Form) -> None:
        """Hook for change-notification adapters: revalidate the changed field."""
        self.validate_field(field, form)

    def set_form_errors(
        self,
        form: Form,
        server_errors: Mapping[str, list[str] | str] | None,
    ) -> None:
        """Replace every field's server errors with the supplied messages.

        Fields missing from ``server_errors`` are cleared. A bare string is
        taken as a single message.
        """
        server_errors = server_errors or {}
        with form.lock:
            for field in form.get_fields():
                messages = server_errors.get(field.name) or []
                if isinstance(messages, str):
                    messages = [messages]
                field.server_errors = list(messages)

        unknown = [name for name in server_errors if name not in form]
        for name in unknown:
            logger.warning("Server errors for unknown field '%s' ignored", name)

    def get_field_errors(
        self,
        field: Field,
        rule_name: ErrorKey | None = None,
    ) -> str | list[str] | None:
        """Get a field's error messages.

        Args:
            field: The field to inspect
            rule_name: If given, only that rule's message (None if it passed)

        Returns:
            One message, or all local messages followed by the server errors
        """
        if rule_name is not None:
            return field.errors.get(rule_name)

        return list(field.errors.values()) + list(field.server_errors)

    def collect_errors(self, form: Form) -> dict[str, list[str]]:
        """Unified error lists for every field that has any errors.

        The result has the shape ``set_form_errors`` accepts.
        """
        return {
            field.name: self.get_field_errors(field)
            for field in form.get_fields()
            if field.has_errors
        }
