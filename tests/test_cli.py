"""Tests for formrules CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from formrules.cli.main import cli


SIGNUP_YAML = """\
form: signup
fields:
  email:
    rules: [required, email]
  password:
    rules: ["required", "stringMin:8"]
  confirm:
    rules: ["required", "exact:password"]
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_dir(tmp_path):
    forms = tmp_path / "forms"
    forms.mkdir()
    (forms / "signup.yaml").write_text(SIGNUP_YAML)
    return forms


def write_data(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(data))
    return path


class TestRules:
    def test_lists_catalog(self, runner):
        result = runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "required" in lines
        assert "exact" in lines
        assert "44 rule(s) registered." in result.output

    def test_bad_log_level(self, runner):
        result = runner.invoke(cli, ["--log-level", "chatty", "rules"])
        assert result.exit_code != 0
        assert "Unknown log level" in result.output


class TestSchemaValidate:
    def test_valid_directory(self, runner, schema_dir):
        result = runner.invoke(cli, ["schema", "validate", "--schemas", str(schema_dir)])
        assert result.exit_code == 0
        assert "All form schemas are valid" in result.output

    def test_uses_environment_directory(self, runner, schema_dir, monkeypatch):
        monkeypatch.setenv("FORMRULES_SCHEMA_PATH", str(schema_dir))
        result = runner.invoke(cli, ["schema", "validate"])
        assert result.exit_code == 0

    def test_reports_errors(self, runner, schema_dir):
        (schema_dir / "broken.yaml").write_text(
            "form: broken\nfields:\n  a:\n    rules: [nope]\n"
        )
        result = runner.invoke(cli, ["schema", "validate", "--schemas", str(schema_dir)])
        assert result.exit_code == 1
        assert "Unknown rule 'nope'" in result.output
        assert "1 schema error(s) found" in result.output

    def test_warnings_pass_unless_strict(self, runner, schema_dir):
        (schema_dir / "loose.yaml").write_text(
            "form: loose\nfields:\n  a:\n    rules: [stringMin]\n"
        )
        args = ["schema", "validate", "--schemas", str(schema_dir)]

        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "1 warning(s) found." in result.output

        result = runner.invoke(cli, args + ["--strict"])
        assert result.exit_code == 1

    def test_single_file(self, runner, schema_dir):
        result = runner.invoke(
            cli, ["schema", "validate", "--path", str(schema_dir / "signup.yaml")]
        )
        assert result.exit_code == 0

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["schema", "validate", "--schemas", str(tmp_path / "absent")]
        )
        assert result.exit_code == 1
        assert "Schema directory not found" in result.output


class TestSchemaList:
    def test_lists_forms(self, runner, schema_dir):
        result = runner.invoke(cli, ["schema", "list", "--schemas", str(schema_dir)])
        assert result.exit_code == 0
        assert "Loaded 1 form(s):" in result.output
        assert "signup (3 fields)" in result.output

    def test_empty_directory(self, runner, tmp_path):
        result = runner.invoke(cli, ["schema", "list", "--schemas", str(tmp_path)])
        assert result.exit_code == 0
        assert "No form schemas found" in result.output


class TestCheck:
    def test_valid_data(self, runner, schema_dir, tmp_path):
        data = write_data(tmp_path, {
            "email": "someone@example.com",
            "password": "correct horse",
            "confirm": "correct horse",
        })
        result = runner.invoke(
            cli, ["check", "signup", "--data", str(data), "--schemas", str(schema_dir)]
        )
        assert result.exit_code == 0
        assert "Form 'signup' is valid." in result.output

    def test_invalid_data(self, runner, schema_dir, tmp_path):
        data = write_data(tmp_path, {
            "email": "not-an-email",
            "password": "short",
            "confirm": "different",
        })
        result = runner.invoke(
            cli, ["check", "signup", "--data", str(data), "--schemas", str(schema_dir)]
        )
        assert result.exit_code == 1
        assert "this field has to be a valid email address." in result.output
        assert "this field should be the same as the password field." in result.output
        assert "3 field(s) with errors" in result.output

    def test_json_output(self, runner, schema_dir, tmp_path):
        data = write_data(tmp_path, {"email": "someone@example.com"})
        result = runner.invoke(
            cli,
            ["check", "signup", "--data", str(data), "--json", "--schemas", str(schema_dir)],
        )
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["valid"] is False
        assert set(payload["errors"]) == {"password", "confirm"}
        assert payload["errors"]["password"][0] == "this field is required."

    def test_yaml_data(self, runner, schema_dir, tmp_path):
        data = tmp_path / "data.yaml"
        data.write_text("email: someone@example.com\npassword: hunter22\nconfirm: hunter22\n")
        result = runner.invoke(
            cli, ["check", "signup", "--data", str(data), "--schemas", str(schema_dir)]
        )
        assert result.exit_code == 0

    def test_unknown_form(self, runner, schema_dir, tmp_path):
        data = write_data(tmp_path, {})
        result = runner.invoke(
            cli, ["check", "login", "--data", str(data), "--schemas", str(schema_dir)]
        )
        assert result.exit_code == 2
        assert "login" in result.output

    def test_unknown_rule_is_schema_error(self, runner, tmp_path):
        forms = tmp_path / "forms"
        forms.mkdir()
        (forms / "x.yaml").write_text("form: x\nfields:\n  a:\n    rules: [nope]\n")
        data = write_data(tmp_path, {"a": "value"})

        result = runner.invoke(
            cli, ["check", "x", "--data", str(data), "--schemas", str(forms)]
        )
        assert result.exit_code == 2
        assert "Rule 'nope' is not registered." in result.output
