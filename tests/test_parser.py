"""Tests for rule specification parsing and resolution."""

import pytest

from formrules.errors import UnknownRuleError
from formrules.parser import (
    InlineRuleSpec,
    NamedRuleSpec,
    parse_rule_name,
    parse_rule_spec,
)
from formrules.registry import default_registry
from formrules.types import Rule


INLINE = Rule(
    test=lambda field, args, form: field.value == "ok",
    message=lambda field, args, form: "this field has to be ok.",
)


class TestParseRuleName:

    def test_bare_name_has_no_args(self):
        assert parse_rule_name("required") == NamedRuleSpec("required", [])

    def test_single_argument(self):
        assert parse_rule_name("stringMin:3") == NamedRuleSpec("stringMin", ["3"])

    def test_multiple_arguments(self):
        spec = parse_rule_name("numberBetween:1,10")
        assert spec.name == "numberBetween"
        assert spec.args == ["1", "10"]

    def test_splits_on_first_colon_only(self):
        spec = parse_rule_name("dateFormat:%H:%M")
        assert spec.name == "dateFormat"
        assert spec.args == ["%H:%M"]

    def test_empty_argument_list(self):
        assert parse_rule_name("stringMin:").args == [""]

    def test_str_round_trips_the_entry(self):
        assert str(parse_rule_name("arrayContains:a,b")) == "arrayContains:a,b"
        assert str(parse_rule_name("required")) == "required"


class TestParseRuleSpec:

    def test_string_entry(self):
        assert isinstance(parse_rule_spec("email"), NamedRuleSpec)

    def test_inline_rule_entry(self):
        spec = parse_rule_spec(INLINE)
        assert isinstance(spec, InlineRuleSpec)
        assert spec.rule is INLINE

    def test_spec_passes_through(self):
        spec = NamedRuleSpec("email")
        assert parse_rule_spec(spec) is spec

    def test_other_types_rejected(self):
        with pytest.raises(TypeError):
            parse_rule_spec(42)


class TestResolve:

    def test_named_rule_keyed_by_name(self):
        resolved = parse_rule_spec("stringMin:3").resolve(default_registry(), 4)
        assert resolved.error_key == "stringMin"
        assert resolved.args == ["3"]
        assert resolved.test is default_registry().get("stringMin").test

    def test_inline_rule_keyed_by_position(self):
        resolved = parse_rule_spec(INLINE).resolve(default_registry(), 2)
        assert resolved.error_key == 2
        assert resolved.args == []
        assert resolved.message is INLINE.message

    def test_unknown_rule(self):
        with pytest.raises(UnknownRuleError):
            parse_rule_spec("nope:1").resolve(default_registry(), 0)
