"""Rule registry for formrules.

Provides lookup of named rules. A registry is immutable configuration
handed to a ValidationEngine; adding custom rules produces a new registry,
so independent engines with different catalogs can coexist.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from formrules.errors import UnknownRuleError
from formrules.rules import builtin_rules
from formrules.types import Rule, RuleMessage, RuleTest


class RuleRegistry(Mapping[str, Rule]):
    """Immutable mapping from rule name to Rule.

    Example:
        registry = default_registry().with_rules(
            evenNumber=Rule(
                test=lambda field, args, form: int(field.value) % 2 == 0,
                message=lambda field, args, form: "this field has to be even.",
            ),
        )
        engine = ValidationEngine(registry)
    """

    def __init__(self, rules: Mapping[str, Rule] | None = None):
        named = {}
        for name, rule in (rules or {}).items():
            if rule.name != name:
                rule = Rule(test=rule.test, message=rule.message, name=name)
            named[name] = rule
        self._rules = MappingProxyType(named)

    def get(self, name: str) -> Rule:  # type: ignore[override]
        """Get a registered rule by name.

        Args:
            name: The rule name (without arguments)

        Returns:
            The rule

        Raises:
            UnknownRuleError: If the rule is not registered
        """
        if name not in self._rules:
            raise UnknownRuleError(name)
        return self._rules[name]

    def __getitem__(self, name: str) -> Rule:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def is_registered(self, name: str) -> bool:
        """Check if a rule is registered."""
        return name in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def with_rules(self, rules: Mapping[str, Rule] | None = None, **named: Rule) -> "RuleRegistry":
        """Return a new registry with extra (or replacement) rules."""
        merged = dict(self._rules)
        merged.update(rules or {})
        merged.update(named)
        return RuleRegistry(merged)

    def with_rule(self, name: str, test: RuleTest, message: RuleMessage) -> "RuleRegistry":
        """Return a new registry with one extra rule built from its functions."""
        return self.with_rules({name: Rule(test=test, message=message, name=name)})

    def __repr__(self) -> str:
        return f"RuleRegistry({len(self)} rules)"


_DEFAULT_REGISTRY: RuleRegistry | None = None


def default_registry() -> RuleRegistry:
    """The registry holding the built-in catalog."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = RuleRegistry(builtin_rules())
    return _DEFAULT_REGISTRY
