"""formrules — rule-driven form validation.

Fields carry ordered rule lists (``"required"``, ``"stringMin:8"``,
``"exact:password"`` or inline Rule objects). The engine runs every rule,
records one message per failure, and merges server-side errors into the
same per-field error list.

Usage:
    from formrules import Form, ValidationEngine

    form = Form.from_schema({
        "email": {"rules": ["required", "email"]},
        "password": {"rules": ["required", "stringMin:8"]},
        "confirm": {"rules": ["required", "exact:password"]},
    })
    engine = ValidationEngine()

    form.field("email").value = "someone@example.com"
    if not engine.validate_form(form):
        errors = engine.collect_errors(form)

    # Later, merge errors returned by a server
    engine.set_form_errors(form, {"email": ["this email is already taken."]})
"""

from formrules.engine import ValidationEngine
from formrules.errors import FormRulesError, MissingSiblingFieldError, UnknownRuleError
from formrules.form import Field, Form
from formrules.loader import FormSchema, FormSchemaLoader, load_schema_file
from formrules.parser import (
    InlineRuleSpec,
    NamedRuleSpec,
    ResolvedRule,
    parse_rule_spec,
)
from formrules.registry import RuleRegistry, default_registry
from formrules.types import (
    FieldSpec,
    Rule,
    RuleEntry,
    ServerErrors,
    ValidationCallback,
)
from formrules.watch import FormWatcher

__all__ = [
    # Types
    "FieldSpec",
    "Rule",
    "RuleEntry",
    "ServerErrors",
    "ValidationCallback",
    # Errors
    "FormRulesError",
    "MissingSiblingFieldError",
    "UnknownRuleError",
    # Model
    "Field",
    "Form",
    # Registry and parsing
    "InlineRuleSpec",
    "NamedRuleSpec",
    "ResolvedRule",
    "RuleRegistry",
    "default_registry",
    "parse_rule_spec",
    # Engine
    "ValidationEngine",
    "FormWatcher",
    # Schemas
    "FormSchema",
    "FormSchemaLoader",
    "load_schema_file",
]
