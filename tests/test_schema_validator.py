"""Tests for form schema validation (structure and rule references)."""

from pathlib import Path

from formrules.registry import default_registry
from formrules.schema_validator import (
    SchemaIssue,
    check_rules,
    validate_schema_dir,
    validate_schema_file,
)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


VALID_YAML = """\
form: signup
fields:
  email:
    rules: [required, email]
  password:
    rules: ["required", "stringMin:8"]
  confirm:
    rules: ["required", "exact:password"]
"""


class TestStructure:

    def test_valid_file(self, tmp_path):
        assert validate_schema_file(write(tmp_path / "signup.yaml", VALID_YAML)) == []

    def test_empty_file(self, tmp_path):
        issues = validate_schema_file(write(tmp_path / "empty.yaml", "\n"))
        assert len(issues) == 1
        assert "empty" in issues[0].message

    def test_yaml_error(self, tmp_path):
        issues = validate_schema_file(write(tmp_path / "bad.yaml", "form: [oops\n"))
        assert len(issues) == 1
        assert issues[0].message.startswith("YAML parse error")

    def test_missing_fields(self, tmp_path):
        issues = validate_schema_file(write(tmp_path / "x.yaml", "form: x\n"))
        assert [i.severity for i in issues] == ["error"]
        assert "'fields' is a required property" in issues[0].message

    def test_unknown_top_level_key(self, tmp_path):
        text = VALID_YAML + "title: Sign up\n"
        issues = validate_schema_file(write(tmp_path / "x.yaml", text))
        assert any("title" in i.message for i in issues)

    def test_non_string_rule_reports_path(self, tmp_path):
        text = "form: x\nfields:\n  age:\n    rules: [required, 5]\n"
        issues = validate_schema_file(write(tmp_path / "x.yaml", text))
        assert len(issues) == 1
        assert issues[0].path == "fields/age/rules[1]"

    def test_structural_errors_skip_rule_checks(self, tmp_path):
        text = "form: x\nfields:\n  a:\n    rules: [noSuchRule]\n    colour: red\n"
        issues = validate_schema_file(write(tmp_path / "x.yaml", text))
        assert all("noSuchRule" not in i.message for i in issues)


class TestRuleChecks:

    def doc(self, **fields):
        return {"form": "x", "fields": fields}

    def test_unknown_rule(self):
        issues = check_rules(
            self.doc(name={"rules": ["required", "fullName"]}), Path("x.yaml")
        )
        assert len(issues) == 1
        assert issues[0].message == "Unknown rule 'fullName'"
        assert issues[0].severity == "error"
        assert issues[0].path == "fields/name/rules[1]"

    def test_missing_arguments_is_warning(self):
        issues = check_rules(
            self.doc(age={"rules": ["numberBetween:18"]}), Path("x.yaml")
        )
        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert issues[0].message == "Rule 'numberBetween' expects 2 argument(s), got 1"

    def test_unknown_sibling(self):
        issues = check_rules(
            self.doc(confirm={"rules": ["exact:pasword"]}, password=None),
            Path("x.yaml"),
        )
        assert [i.message for i in issues] == [
            "Rule 'exact' references unknown field 'pasword'"
        ]

    def test_null_field_descriptor(self):
        assert check_rules(self.doc(name=None), Path("x.yaml")) == []

    def test_custom_registry(self):
        registry = default_registry().with_rule(
            "fullName",
            lambda field, args, form: True,
            lambda field, args, form: "",
        )
        issues = check_rules(
            self.doc(name={"rules": ["fullName"]}), Path("x.yaml"), registry
        )
        assert issues == []


class TestDirectory:

    def test_missing_directory(self, tmp_path):
        issues = validate_schema_dir(tmp_path / "absent")
        assert len(issues) == 1
        assert "does not exist" in issues[0].message

    def test_collects_across_files(self, tmp_path):
        write(tmp_path / "ok.yaml", VALID_YAML)
        write(tmp_path / "nested" / "bad.yml", "form: bad\nfields:\n  a:\n    rules: [nope]\n")

        issues = validate_schema_dir(tmp_path)

        assert len(issues) == 1
        assert issues[0].file == tmp_path / "nested" / "bad.yml"

    def test_strict_escalates_warnings(self, tmp_path):
        write(tmp_path / "x.yaml", "form: x\nfields:\n  a:\n    rules: ['stringMin']\n")

        assert [i.severity for i in validate_schema_dir(tmp_path)] == ["warning"]
        assert [i.severity for i in validate_schema_dir(tmp_path, strict=True)] == ["error"]


class TestSchemaIssue:

    def test_str(self):
        issue = SchemaIssue(Path("forms/x.yaml"), "Unknown rule 'nope'", "fields/a/rules[0]")
        assert str(issue) == "[ERROR] forms/x.yaml at fields/a/rules[0]: Unknown rule 'nope'"

    def test_str_without_path(self):
        issue = SchemaIssue(Path("x.yaml"), "bad", severity="warning")
        assert str(issue) == "[WARNING] x.yaml: bad"
