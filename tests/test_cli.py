"""Tests for the apigov command-line interface."""

import json

import yaml
from click.testing import CliRunner

from apigov.cli import cli


def write_spec(tmp_path, name, document):
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_check_compliant_spec(tmp_path, compliant_spec):
    """Test a compliant spec exits 0 with full score."""
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    result = CliRunner().invoke(cli, ["check", str(spec)])

    assert result.exit_code == 0
    assert "governance score 100" in result.output
    assert "No governance violations found." in result.output


def test_check_violations_exit_nonzero(tmp_path, compliant_spec):
    """Test any violation makes the command fail."""
    del compliant_spec["servers"]
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    result = CliRunner().invoke(cli, ["check", str(spec)])

    assert result.exit_code == 1
    assert "governance score 90" in result.output
    assert "[WARNING] security: servers" in result.output


def test_check_multiple_specs(tmp_path, compliant_spec):
    """Test every spec is reported and one failure fails the run."""
    good = write_spec(tmp_path, "good.json", compliant_spec)
    bad = write_spec(tmp_path, "bad.json", {"paths": {}})
    result = CliRunner().invoke(cli, ["check", str(good), str(bad)])

    assert result.exit_code == 1
    assert "good.json: governance score 100" in result.output
    assert "bad.json: governance score" in result.output


def test_check_json_format(tmp_path, compliant_spec):
    """Test JSON output is a parseable compliance report."""
    del compliant_spec["info"]["version"]
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    result = CliRunner().invoke(cli, ["check", str(spec), "--format", "json"])

    data = json.loads(result.output)
    assert result.exit_code == 1
    assert data["score"] == 85
    assert data["violations"][0]["path"] == "info.version"


def test_check_with_policy(tmp_path, compliant_spec):
    """Test a policy file changes the score."""
    del compliant_spec["servers"]
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    policy = tmp_path / "policy.yaml"
    policy.write_text("policy:\n  sensitivity: 5\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["check", str(spec), "--policy", str(policy)])
    assert "governance score 95" in result.output


def test_check_output_file(tmp_path, compliant_spec):
    """Test writing a Markdown report to a file."""
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    output = tmp_path / "reports" / "governance.md"
    result = CliRunner().invoke(
        cli, ["check", str(spec), "--format", "markdown", "--output", str(output)]
    )

    assert result.exit_code == 0
    assert output.read_text(encoding="utf-8").startswith("# Governance Report: Orders API")


def test_check_text_output_file(tmp_path, compliant_spec):
    """Test --format text with --output writes the text rendering."""
    spec = write_spec(tmp_path, "openapi.json", compliant_spec)
    output = tmp_path / "governance.txt"
    result = CliRunner().invoke(
        cli, ["check", str(spec), "--format", "text", "--output", str(output)]
    )

    assert result.exit_code == 0
    content = output.read_text(encoding="utf-8")
    assert "governance score 100" in content
    assert not content.lstrip().startswith("{")


def test_check_invalid_utf8_file(tmp_path):
    """Test an undecodable spec file is reported as a usage error."""
    spec = tmp_path / "bad.yaml"
    spec.write_bytes(b"info:\n  title: \xff\xfe\n")
    result = CliRunner().invoke(cli, ["check", str(spec)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "bad.yaml" in result.output


def test_check_missing_file(tmp_path):
    """Test a missing spec file is reported as an error."""
    result = CliRunner().invoke(cli, ["check", str(tmp_path / "missing.json")])
    assert result.exit_code != 0
    assert "File not found" in result.output


def test_check_invalid_document(tmp_path):
    """Test a document with non-mapping paths is rejected."""
    spec = write_spec(tmp_path, "openapi.json", {"paths": ["/api/items"]})
    result = CliRunner().invoke(cli, ["check", str(spec)])
    assert result.exit_code != 0
    assert '"paths" must be a mapping' in result.output


def test_policy_command():
    """Test the default policy is printed as YAML."""
    result = CliRunner().invoke(cli, ["policy"])
    assert result.exit_code == 0
    data = yaml.safe_load(result.output)
    assert data["policy"]["category_weights"]["security"] == 30
