"""Rule specification parsing.

A field's rule list holds either ``"ruleName[:arg1,arg2,...]"`` strings that
reference the registry, or inline Rule objects. ``parse_rule_spec`` turns each
entry into one of two spec variants; each variant knows how to resolve
itself into the ``(test, message, args, error_key)`` the engine runs.

Arguments are split on commas with no escaping, so they cannot themselves
contain commas.
"""

from dataclasses import dataclass, field
from typing import Any

from formrules.registry import RuleRegistry
from formrules.types import ErrorKey, Rule, RuleMessage, RuleTest


@dataclass(frozen=True)
class ResolvedRule:
    """A rule ready to run against one field."""

    test: RuleTest
    message: RuleMessage
    args: list[str]
    error_key: ErrorKey


@dataclass(frozen=True)
class NamedRuleSpec:
    """Reference to a registry rule plus its parsed arguments."""

    name: str
    args: list[str] = field(default_factory=list)

    def resolve(self, registry: RuleRegistry, index: int) -> ResolvedRule:
        rule = registry.get(self.name)
        return ResolvedRule(rule.test, rule.message, list(self.args), self.name)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}:{','.join(self.args)}"


@dataclass(frozen=True)
class InlineRuleSpec:
    """A rule supplied directly on the field, keyed by its list position."""

    rule: Rule

    def resolve(self, registry: RuleRegistry, index: int) -> ResolvedRule:
        return ResolvedRule(self.rule.test, self.rule.message, [], index)


RuleSpec = NamedRuleSpec | InlineRuleSpec


def parse_rule_name(entry: str) -> NamedRuleSpec:
    """Split ``"name:a,b"`` on the first colon; no colon means no arguments."""
    name, sep, raw_args = entry.partition(":")
    return NamedRuleSpec(name=name, args=raw_args.split(",") if sep else [])


def parse_rule_spec(entry: Any) -> RuleSpec:
    """Normalise one rule entry into a spec variant.

    Raises:
        TypeError: If the entry is neither a string nor a Rule
    """
    if isinstance(entry, (NamedRuleSpec, InlineRuleSpec)):
        return entry
    if isinstance(entry, str):
        return parse_rule_name(entry)
    if isinstance(entry, Rule):
        return InlineRuleSpec(entry)
    raise TypeError(
        f"Rule entries must be 'name:args' strings or Rule objects, got {type(entry).__name__}"
    )

