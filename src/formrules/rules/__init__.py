"""Built-in rule catalog for formrules.

Usage:
    from formrules.rules import builtin_rules

    rules = builtin_rules()
    rules["stringMin"].test(field, ["3"], form)
"""

from formrules.rules.builtins import (
    EMAIL_PATTERN,
    MONEY_PATTERN,
    NAME_PATTERN,
    PHONE_PATTERN,
    SEQUENCES,
    URL_PATTERN,
    builtin_rules,
)

__all__ = [
    "EMAIL_PATTERN",
    "MONEY_PATTERN",
    "NAME_PATTERN",
    "PHONE_PATTERN",
    "SEQUENCES",
    "URL_PATTERN",
    "builtin_rules",
]
